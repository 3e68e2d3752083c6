"""
MiniJava Front End Package

A from-scratch scanner and parser for MiniJava, the small class-based
subset of Java. Source text goes in; an immutable abstract syntax tree and
a list of diagnostics come out, ready for semantic analysis or code
generation.

Architecture:
    minijava/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis, error recovery and AST
    ├── visitor/         # Tree traversals and the pretty printer
    └── cli.py           # `minijava lex` / `minijava parse`
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer
from .parser import Parser, parse_string, parse_file
from .visitor import pretty_print

__all__ = [
    # Core classes
    "Lexer",
    "Parser",

    # Convenience functions
    "parse_string",
    "parse_file",
    "pretty_print",

    # Version info
    "__version__",
    "__license__",
]
