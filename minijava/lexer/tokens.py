"""
Token definitions for the MiniJava lexer.

This module defines the closed set of token types recognized by the lexer:
- Identifiers and integer literals (the only tokens carrying a semantic value)
- Binary operators
- Reserved words
- Punctuation
- End of input and unrecognized input

The lookup tables at the bottom are built once at import time and never
mutated, so any number of lexers can share them.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Dict


class TokenType(Enum):
    """
    Enumeration of all token types in MiniJava.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Basic Tokens
    # ========================================================================
    IDENTIFIER = auto()             # [a-zA-Z][a-zA-Z0-9_]*
    INTEGER_LITERAL = auto()        # [0-9]+
    EOF = auto()                    # Input has been consumed
    INVALID = auto()                # Character/sequence could not be processed

    # ========================================================================
    # Binary Operators
    # ========================================================================
    LOGICAL_AND = auto()            # &&
    LESS_THAN = auto()              # <
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *

    # ========================================================================
    # Reserved Words (case-sensitive)
    # ========================================================================
    CLASS = auto()                  # class
    PUBLIC = auto()                 # public
    STATIC = auto()                 # static
    VOID = auto()                   # void
    MAIN = auto()                   # main
    STRING = auto()                 # String
    EXTENDS = auto()                # extends
    RETURN = auto()                 # return
    INT = auto()                    # int
    BOOLEAN = auto()                # boolean
    IF = auto()                     # if
    ELSE = auto()                   # else
    WHILE = auto()                  # while
    TRUE = auto()                   # true
    FALSE = auto()                  # false
    THIS = auto()                   # this
    NEW = auto()                    # new

    # ========================================================================
    # Punctuation
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    SEMICOLON = auto()              # ;
    COMMA = auto()                  # ,
    DOT = auto()                    # .
    ASSIGN = auto()                 # =
    LOGICAL_NOT = auto()            # !


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the MiniJava language.

    Contains the token type, lexeme (raw text), semantic value and the
    1-based line/column of the token's first character. Only IDENTIFIER
    (the spelling) and INTEGER_LITERAL (the int value) carry a value.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    line: int
    column: int
    value: Any = None               # Parsed/semantic value

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.type.name} ({self.line},{self.column}): {self.value}"
        return f"{self.type.name} ({self.line},{self.column})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.line}, {self.column}, {self.value!r})")

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a reserved word."""
        return self.type in KEYWORD_TYPES

    @property
    def is_operator(self) -> bool:
        """Check if this token is a binary operator."""
        return self.type in BINARY_OPERATORS

    @property
    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER


# Lookup tables for efficient token recognition

KEYWORDS: Dict[str, TokenType] = {
    "class": TokenType.CLASS,
    "public": TokenType.PUBLIC,
    "static": TokenType.STATIC,
    "void": TokenType.VOID,
    "main": TokenType.MAIN,
    "String": TokenType.STRING,
    "extends": TokenType.EXTENDS,
    "return": TokenType.RETURN,
    "int": TokenType.INT,
    "boolean": TokenType.BOOLEAN,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "this": TokenType.THIS,
    "new": TokenType.NEW,
}

KEYWORD_TYPES = frozenset(KEYWORDS.values())

# Every single-character operator and punctuation mark. '&' and '/' are
# absent: they only form tokens together with the following character.
PUNCTUATION: Dict[str, TokenType] = {
    "<": TokenType.LESS_THAN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "=": TokenType.ASSIGN,
    "!": TokenType.LOGICAL_NOT,
}

BINARY_OPERATORS = frozenset({
    TokenType.LOGICAL_AND,
    TokenType.LESS_THAN,
    TokenType.PLUS,
    TokenType.MINUS,
    TokenType.MULTIPLY,
})

# Spelling of every fixed-text token type, used in diagnostics
TOKEN_SPELLINGS: Dict[TokenType, str] = {
    **{token_type: text for text, token_type in KEYWORDS.items()},
    **{token_type: text for text, token_type in PUNCTUATION.items()},
    TokenType.LOGICAL_AND: "&&",
}

# Largest value an integer literal may have (32-bit signed int)
MAX_INTEGER_LITERAL = 2**31 - 1
