"""
Error handling for the MiniJava lexer.

Lexical problems never stop scanning: the lexer records them as diagnostics
and hands an INVALID token to the parser, which decides how to recover.
"""

from typing import Optional, List
from dataclasses import dataclass


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    filename: str
    line: int
    column: int
    severity: str  # "error", "warning", "info"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    @property
    def location(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    A lexical error recorded by the lexer.

    The lexer never raises these; they are collected in ``Lexer.errors``.
    """

    def __init__(
        self,
        message: str,
        filename: str,
        line: int,
        column: int,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            filename=filename,
            line=line,
            column=column,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def line(self) -> int:
        return self.diagnostic.line

    @property
    def column(self) -> int:
        return self.diagnostic.column

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class LexerWarning:
    """
    Represents a lexer warning that doesn't stop compilation.
    """

    def __init__(
        self,
        message: str,
        filename: str,
        line: int,
        column: int,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        self.diagnostic = Diagnostic(
            message=message,
            filename=filename,
            line=line,
            column=column,
            severity="warning",
            code=code,
            help_text=help_text
        )

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
    "L007": "Number literal overflow",
    "L011": "Unterminated block comment",
}

# Characters that are only valid as the first half of a two-character form
INCOMPLETE_OPERATOR_HINTS = {
    "&": "Use '&&' for logical and; a single '&' is not an operator.",
    "/": "Division is not supported; '/' may only start a '//' or '/*' comment.",
}


# Helper functions for creating common errors

def create_invalid_character_error(char: str, filename: str, line: int, column: int) -> LexerError:
    """Create an error for an invalid character."""
    suggestions = []
    help_text = INCOMPLETE_OPERATOR_HINTS.get(char)

    if char == "&":
        suggestions.append("&&")
    elif help_text is None:
        if char.isprintable():
            help_text = f"The character '{char}' is not valid in MiniJava source code."
        else:
            help_text = f"Non-printable character (U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Invalid character: {char!r}",
        filename=filename,
        line=line,
        column=column,
        code="L001",
        help_text=help_text,
        suggestions=suggestions or None
    )


def create_integer_overflow_error(lexeme: str, limit: int, filename: str,
                                  line: int, column: int) -> LexerError:
    """Create an error for an integer literal that does not fit in an int."""
    shown = lexeme if len(lexeme) <= 40 else f"{lexeme[:20]}...({len(lexeme)} digits)"
    return LexerError(
        message=f"Integer literal out of range: {shown}",
        filename=filename,
        line=line,
        column=column,
        code="L007",
        help_text=f"Integer literals must not exceed {limit}."
    )


def create_unterminated_comment_warning(filename: str, line: int, column: int) -> LexerWarning:
    """Create a warning for a block comment still open at end of input."""
    return LexerWarning(
        message="Unterminated block comment",
        filename=filename,
        line=line,
        column=column,
        code="L011",
        help_text="The comment runs to the end of the file; add a matching '*/'."
    )
