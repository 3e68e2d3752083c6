"""
MiniJava Lexer Package

Implements a from-scratch lexical analyzer (scanner) for MiniJava.

Key Features:
- Pull-based scanning from strings or open text streams
- One token of lookahead via peek()
- Nested block comments
- Line/column tracking across \\n, \\r and \\r\\n line endings
- Total tokenization: bad input becomes INVALID tokens plus diagnostics
"""

from .tokens import Token, TokenType, KEYWORDS, PUNCTUATION
from .lexer import Lexer, tokenize_string, tokenize_file, DEFAULT_TAB_WIDTH
from .errors import Diagnostic, LexerError, LexerWarning

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "KEYWORDS",
    "PUNCTUATION",
    "DEFAULT_TAB_WIDTH",
    "tokenize_string",
    "tokenize_file",
    "Diagnostic",
    "LexerError",
    "LexerWarning",
]
