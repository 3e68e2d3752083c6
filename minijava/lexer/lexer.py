"""
MiniJava Lexer - turns a character stream into tokens on demand.

The parser pulls tokens one at a time with next_token() and may look one
token further ahead with peek(). Characters are read from the source one
at a time, so the lexer works the same on strings and open files.
"""

import io
import logging
import string
from typing import Iterator, List, Optional, TextIO, Union

from .tokens import Token, TokenType, KEYWORDS, PUNCTUATION, MAX_INTEGER_LITERAL
from .errors import (
    LexerError, LexerWarning, create_invalid_character_error,
    create_integer_overflow_error, create_unterminated_comment_warning
)

logger = logging.getLogger(__name__)

DEFAULT_TAB_WIDTH = 4

WHITESPACE = frozenset(" \t\n\r\f\v")
IDENTIFIER_START = frozenset(string.ascii_letters)
IDENTIFIER_CONTINUE = frozenset(string.ascii_letters + string.digits + "_")
DIGITS = frozenset(string.digits)
MAX_INTEGER_DIGITS = len(str(MAX_INTEGER_LITERAL))


class Lexer:
    """
    MiniJava lexical analyzer.

    Converts source text into a stream of tokens. Malformed input never
    raises: unrecognized characters come back as INVALID tokens and are
    recorded in ``errors`` so the parser can decide how to recover.
    """

    def __init__(self, source: Union[str, TextIO], filename: str = "<unknown>",
                 tab_width: int = DEFAULT_TAB_WIDTH):
        """
        Initialize the lexer with a character source.

        Args:
            source: Source code string or readable text stream
            filename: Name of source file for error reporting
            tab_width: Number of columns a tab character advances
        """
        if isinstance(source, str):
            source = io.StringIO(source)
        if tab_width < 1:
            raise ValueError(f"tab_width must be positive, got {tab_width}")

        self.stream = source
        self.filename = filename
        self.tab_width = tab_width
        self.line = 1
        self.column = 1
        self.errors: List[LexerError] = []
        self.warnings: List[LexerWarning] = []

        self._id_value: Optional[str] = None
        self._int_value: Optional[int] = None
        self._lookahead: Optional[Token] = None
        self._pending: Optional[str] = None
        self._char = self._read()

    @property
    def id_value(self) -> Optional[str]:
        """Spelling of the most recently returned IDENTIFIER token."""
        return self._id_value

    @property
    def int_value(self) -> Optional[int]:
        """Value of the most recently returned INTEGER_LITERAL token."""
        return self._int_value

    def next_token(self) -> Token:
        """
        Consume and return the next token.

        Once the source is exhausted an EOF token is returned on every call.
        """
        if self._lookahead is not None:
            token, self._lookahead = self._lookahead, None
        else:
            token = self._scan()

        if token.type == TokenType.IDENTIFIER:
            self._id_value = token.value
        elif token.type == TokenType.INTEGER_LITERAL:
            self._int_value = token.value

        return token

    def peek(self) -> Token:
        """Return the token next_token() will return, without consuming it."""
        if self._lookahead is None:
            self._lookahead = self._scan()
        return self._lookahead

    def tokenize(self) -> List[Token]:
        """
        Tokenize the rest of the source.

        Returns:
            List of tokens including the EOF token
        """
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def _scan(self) -> Token:
        """Classify the next run of characters into a token."""
        self._skip_whitespace_and_comments()

        line, column = self.line, self.column
        char = self._char

        if not char:
            return Token(TokenType.EOF, "", line, column)

        if char in IDENTIFIER_START:
            return self._tokenize_identifier_or_keyword(line, column)

        if char in DIGITS:
            return self._tokenize_integer(line, column)

        if char == "&":
            if self._peek_char() == "&":
                self._advance_by(2)
                return Token(TokenType.LOGICAL_AND, "&&", line, column)
            # The probed character is left in place and scanned next
            return self._invalid_character(line, column)

        token_type = PUNCTUATION.get(char)
        if token_type is not None:
            self._advance()
            return Token(token_type, char, line, column)

        return self._invalid_character(line, column)

    def _tokenize_identifier_or_keyword(self, line: int, column: int) -> Token:
        """Tokenize an identifier or reserved word."""
        chars = []
        while self._char and self._char in IDENTIFIER_CONTINUE:
            chars.append(self._char)
            self._advance()

        lexeme = "".join(chars)
        token_type = KEYWORDS.get(lexeme)
        if token_type is not None:
            return Token(token_type, lexeme, line, column)

        return Token(TokenType.IDENTIFIER, lexeme, line, column, lexeme)

    def _tokenize_integer(self, line: int, column: int) -> Token:
        """Tokenize an integer literal, rejecting values that overflow an int."""
        chars = []
        while self._char and self._char in DIGITS:
            chars.append(self._char)
            self._advance()

        lexeme = "".join(chars)
        # Compare lengths first; int() refuses very long digit strings
        significant = lexeme.lstrip("0") or "0"
        value = int(significant) if len(significant) <= MAX_INTEGER_DIGITS else None
        if value is None or value > MAX_INTEGER_LITERAL:
            error = create_integer_overflow_error(
                lexeme, MAX_INTEGER_LITERAL, self.filename, line, column
            )
            self.errors.append(error)
            logger.debug("%s:%d:%d: integer literal %s out of range",
                         self.filename, line, column, lexeme)
            return Token(TokenType.INVALID, lexeme, line, column)

        return Token(TokenType.INTEGER_LITERAL, lexeme, line, column, value)

    def _invalid_character(self, line: int, column: int) -> Token:
        """Consume one unrecognized character and return an INVALID token."""
        char = self._char
        self.errors.append(
            create_invalid_character_error(char, self.filename, line, column)
        )
        logger.debug("%s:%d:%d: invalid character %r", self.filename, line, column, char)
        self._advance()
        return Token(TokenType.INVALID, char, line, column)

    def _skip_whitespace_and_comments(self):
        """Skip whitespace, line comments and (nested) block comments."""
        while self._char:
            if self._char in WHITESPACE:
                self._advance()
                continue

            if self._char == "/" and self._peek_char() == "/":
                while self._char and self._char not in "\r\n":
                    self._advance()
                continue

            if self._char == "/" and self._peek_char() == "*":
                self._skip_block_comment()
                continue

            break

    def _skip_block_comment(self):
        """Skip a block comment; each inner '/*' needs its own '*/'."""
        line, column = self.line, self.column
        self._advance_by(2)  # Skip opening /*

        depth = 1
        while depth > 0:
            if not self._char:
                self.warnings.append(
                    create_unterminated_comment_warning(self.filename, line, column)
                )
                logger.debug("%s:%d:%d: unterminated block comment",
                             self.filename, line, column)
                return

            if self._char == "*" and self._peek_char() == "/":
                self._advance_by(2)
                depth -= 1
            elif self._char == "/" and self._peek_char() == "*":
                self._advance_by(2)
                depth += 1
            else:
                self._advance()

    def _read(self) -> str:
        """Read one character from the source ('' at end of input)."""
        if self._pending is not None:
            char, self._pending = self._pending, None
            return char
        return self.stream.read(1)

    def _peek_char(self) -> str:
        """Look at the character after the current one without consuming it."""
        if self._pending is None:
            self._pending = self.stream.read(1)
        return self._pending

    def _advance(self):
        """Advance past the current character, updating line/column."""
        char = self._char
        if not char:
            return

        self._char = self._read()

        if char == "\n":
            self._newline()
        elif char == "\r":
            self._newline()
            # \r\n counts as a single line break
            if self._char == "\n":
                self._char = self._read()
        elif char == "\t":
            self.column += self.tab_width
        else:
            self.column += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()

    def _newline(self):
        self.line += 1
        self.column = 1

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        """Check if lexer encountered any warnings."""
        return len(self.warnings) > 0

    def get_diagnostics(self) -> List[Union[LexerError, LexerWarning]]:
        """Get all diagnostics (errors and warnings)."""
        return self.errors + self.warnings


def tokenize_string(source: str, filename: str = "<string>",
                    tab_width: int = DEFAULT_TAB_WIDTH) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        tab_width: Number of columns a tab character advances

    Returns:
        List of tokens ending with EOF. Lexical errors show up as INVALID
        tokens; use a Lexer directly to inspect the diagnostics.
    """
    return Lexer(source, filename, tab_width).tokenize()


def tokenize_file(filepath: str, tab_width: int = DEFAULT_TAB_WIDTH) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Args:
        filepath: Path to source file
        tab_width: Number of columns a tab character advances

    Returns:
        List of tokens ending with EOF

    Raises:
        OSError: If file cannot be read
    """
    with open(filepath, "r", encoding="utf-8", errors="replace", newline="") as f:
        return Lexer(f, filepath, tab_width).tokenize()
