"""
Error handling for the MiniJava parser.

Syntax errors are recorded, never raised: the parser reports each offending
token once, discards tokens until it reaches a synchronization point chosen
by the enclosing construct, and carries on. Callers read the error count to
decide whether later phases should run.
"""

from typing import Callable, FrozenSet, List, Optional, Tuple, Union

from ..lexer.tokens import Token, TokenType, TOKEN_SPELLINGS
from ..lexer.errors import Diagnostic

Expected = Union[TokenType, str]


class ParseError(Exception):
    """
    A syntax error recorded by the parser.

    Carries the structured record ``expected`` / ``found`` / ``line`` /
    ``column`` together with a Diagnostic for human-readable reporting.
    ``expected`` is either a TokenType or a category such as "expression".
    """

    def __init__(
        self,
        message: str,
        expected: Expected,
        token: Token,
        filename: str = "<unknown>",
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.expected = expected
        self.token = token
        self.diagnostic = Diagnostic(
            message=message,
            filename=filename,
            line=token.line,
            column=token.column,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def found(self) -> TokenType:
        return self.token.type

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def column(self) -> int:
        return self.token.column

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class SyntaxErrorRecovery:
    """
    Panic-mode recovery for the parser.

    The follow sets below nest: each one contains the one of the construct
    enclosing it, so an inner recovery never discards a token that an outer
    construct is waiting for.
    """

    CLASS_BOUNDARIES: FrozenSet[TokenType] = frozenset({
        TokenType.CLASS,
    })

    MEMBER_BOUNDARIES: FrozenSet[TokenType] = CLASS_BOUNDARIES | {
        TokenType.PUBLIC,
        TokenType.RIGHT_BRACE,
    }

    # Fixed tokens of "public static void main(String[] arg) {"
    MAIN_CLASS_HEADER: FrozenSet[TokenType] = frozenset({
        TokenType.PUBLIC,
        TokenType.STATIC,
        TokenType.VOID,
        TokenType.MAIN,
        TokenType.LEFT_PAREN,
        TokenType.STRING,
        TokenType.LEFT_BRACKET,
        TokenType.RIGHT_BRACKET,
        TokenType.RIGHT_PAREN,
        TokenType.LEFT_BRACE,
    })

    STATEMENT_BOUNDARIES: FrozenSet[TokenType] = frozenset({
        TokenType.SEMICOLON,
        TokenType.LEFT_BRACE,
        TokenType.RIGHT_BRACE,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.ELSE,
        TokenType.RETURN,
    })

    EXPRESSION_BOUNDARIES: FrozenSet[TokenType] = frozenset({
        TokenType.RIGHT_PAREN,
        TokenType.RIGHT_BRACKET,
        TokenType.COMMA,
        TokenType.SEMICOLON,
    })

    # Tokens that can begin a statement
    STATEMENT_STARTS: FrozenSet[TokenType] = frozenset({
        TokenType.LEFT_BRACE,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.IDENTIFIER,
    })

    @staticmethod
    def synchronize(current: Token, advance: Callable[[], Token],
                    follow: FrozenSet[TokenType]) -> Tuple[Token, int]:
        """
        Discard tokens until one in ``follow`` (or EOF) is current.

        Args:
            current: The current token
            advance: Consumes the current token and returns the next one
            follow: Token types at which to stop

        Returns:
            The token recovery stopped at and the number of tokens skipped
        """
        skipped = 0
        while current.type != TokenType.EOF and current.type not in follow:
            current = advance()
            skipped += 1
        return current, skipped

    OPENERS: FrozenSet[TokenType] = frozenset({
        TokenType.LEFT_PAREN,
        TokenType.LEFT_BRACKET,
        TokenType.LEFT_BRACE,
    })

    CLOSERS: FrozenSet[TokenType] = frozenset({
        TokenType.RIGHT_PAREN,
        TokenType.RIGHT_BRACKET,
        TokenType.RIGHT_BRACE,
    })

    @staticmethod
    def skip_group(current: Token, advance: Callable[[], Token],
                   follow: FrozenSet[TokenType]) -> Tuple[Token, int]:
        """
        Discard the current token, or the whole bracketed group it opens.

        Closers, EOF and tokens in ``follow`` are left in place so the
        enclosing constructs can still match them.
        """
        if current.type not in SyntaxErrorRecovery.OPENERS:
            if current.type == TokenType.EOF or current.type in follow \
                    or current.type in SyntaxErrorRecovery.CLOSERS:
                return current, 0
            return advance(), 1

        balance = 0
        skipped = 0
        while current.type != TokenType.EOF:
            if current.type in SyntaxErrorRecovery.OPENERS:
                balance += 1
            elif current.type in SyntaxErrorRecovery.CLOSERS:
                balance -= 1
            current = advance()
            skipped += 1
            if balance == 0:
                break
        return current, skipped

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            TokenType.SEMICOLON: ["Add a semicolon ';' to end the statement"],
            TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
            TokenType.RIGHT_BRACKET: ["Add a closing bracket ']'"],
            TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
            TokenType.LEFT_BRACE: ["Add an opening brace '{' to start a block"],
            TokenType.ASSIGN: ["Add an assignment operator '='"],
            TokenType.ELSE: ["Every 'if' needs an 'else' branch"],
        }
        return list(token_suggestions.get(expected, []))


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P005": "Invalid expression",
    "P007": "Invalid type",
    "P013": "Invalid statement",
    "P014": "Invalid class member",
    "P015": "Nesting too deep",
}

# Error code used for each expected category
CATEGORY_CODES = {
    "expression": "P005",
    "type": "P007",
    "statement": "P013",
    "declaration": "P014",
}


def describe_expected(expected: Expected) -> str:
    """Render an expected token type or category for a message."""
    if isinstance(expected, TokenType):
        spelling = TOKEN_SPELLINGS.get(expected)
        if spelling is not None:
            return f"'{spelling}'"
        return expected.name
    return expected


def describe_token(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of input"
    if token.lexeme:
        return f"{token.type.name} '{token.lexeme}'"
    return token.type.name


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: Expected, found: Token,
                                  filename: str = "<unknown>") -> ParseError:
    """Create an error for a token that does not fit the grammar here."""
    expected_str = describe_expected(expected)
    found_str = describe_token(found)

    if isinstance(expected, TokenType):
        code = "P001"
        suggestions = SyntaxErrorRecovery.suggest_missing_token(expected)
    else:
        code = CATEGORY_CODES.get(expected, "P001")
        suggestions = []

    return ParseError(
        message=f"Expected {expected_str}, found {found_str}",
        expected=expected,
        token=found,
        filename=filename,
        code=code,
        help_text=f"The parser expected {expected_str} at this position.",
        suggestions=suggestions or None
    )


def create_nesting_too_deep_error(category: str, found: Token, limit: int,
                                  filename: str = "<unknown>") -> ParseError:
    """Create an error for a statement or expression nested past the limit."""
    return ParseError(
        message=f"{category.capitalize()} nested more than {limit} levels deep",
        expected=category,
        token=found,
        filename=filename,
        code="P015",
        help_text="The nested part is skipped; move it into a separate method.",
    )
