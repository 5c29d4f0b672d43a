# glfx

`glfx` compiles a tiny expression language into x86-64 assembly. The
assembly is in Intel syntax for the GNU assembler. The package has four
parts:

- a lexer (`glfx.lexer`)
- a Pratt parser (`glfx.parser`)
- a semantic analyzer that resolves names and checks types (`glfx.semantic`)
- a code generator for Linux, macOS and Windows (MinGW) (`glfx.codegen`)

## The language

```
# single-line comment
###
  multi-line comment
###
x = 6 * (3 + 4);
y = x / 2;
flag = true;
print y;
print flag;
```

- Values are decimal integers, which must fit in 32 bits, and the booleans `true` and `false`.
- `=` assigns a value. A variable takes the type of its first value, and a later assignment of another type is an error.
- `+ - * /` work on integers only. Parentheses group.
- Division by a literal `0` is rejected.
- `print <expression>;` prints an integer or a boolean.
- Semicolons after statements are optional.

The lexer also recognises hex (`0x…`), octal (`0…`), float, string and
character literals and `:`. The parser does not accept them in expressions.

## Command line

```
glfx program.gl            # writes output.s
glfx program.gl out.s      # writes out.s
```

The command works through these steps in order:

1. It echoes the source it read.
2. It parses the source, then analyzes it.
3. It writes an indented dump of the syntax tree to `ast.txt` in the current directory.
4. It generates assembly for the host platform and writes it to the output file.

On any error it lists the messages of the failing stage on standard error and
exits with status 1. An input file that cannot be opened or is empty also
gives status 1.

## Library use

```python
from glfx.parser import parse
from glfx.semantic import analyze
from glfx.codegen import TargetPlatform, generate

program = parse("x = 2 + 3; print x;")
analyze(program)
assembly = generate(program, TargetPlatform.LINUX)
print(assembly)
```

Each stage raises its own exception when it finds problems: `ParseError`,
`SemanticError` or `CodegenError`. Each exception carries the list of
messages in its `errors` attribute. The stages are also available as classes
(`Parser`, `SemanticAnalyzer`, `CodeGenerator`).

`generate` targets the host platform when no platform is given, as returned
by `detect_platform()`. On an unknown platform it raises `CodegenError`.
`glfx.cli.format_ast` renders an analyzed tree as the text written to
`ast.txt`.

The lexer can be used on its own:

```python
from glfx.lexer import tokenize

for token in tokenize("a = 017;"):
    print(token)   # Token(Type: IDENTIFIER, Literal: "a") ...
```

## What it does not do

- `glfx` only writes assembly text. It does not run an assembler or a linker.
- The generated code calls `print_int` and `print_bool`, with a leading underscore on macOS. The package does not provide these functions; they must be linked in from elsewhere.
- For a variable read in an expression, the code generator emits the same `mov` into the variable's stack slot that it uses for assignment. It does not emit a load. Programs that read variables therefore do not yet compute the intended values.

## Tests

```
pip install -e .[test]
pytest
```