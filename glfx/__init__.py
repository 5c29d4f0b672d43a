"""A small compiler that lexes, parses, type-checks and emits x86-64 assembly."""

__version__ = "0.1.0"