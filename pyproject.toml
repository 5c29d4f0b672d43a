[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "glfx"
version = "0.1.0"
description = "A small compiler for a toy language that emits x86-64 Intel-syntax assembly"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "lexer", "parser", "pratt", "assembly", "x86-64"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
glfx = "glfx.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["glfx"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
