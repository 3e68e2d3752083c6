"""
MiniJava Parser - recursive descent with precedence climbing.

The parser pulls tokens from a Lexer one at a time and builds the AST
bottom-up. Binary operators are handled by precedence climbing; array
indexing, ``.length`` and method calls are parsed as postfix suffixes of
a primary expression.

Syntax errors never abort the parse. Each failed expectation records one
ParseError, and the parser then discards tokens until it reaches a token in
the follow set handed down by the enclosing construct. Sub-trees that could
not be built are represented by Missing nodes.
"""

import logging
from enum import IntEnum
from typing import Dict, FrozenSet, List, Tuple, Type, Union

from ..lexer import Lexer, Token, TokenType, DEFAULT_TAB_WIDTH
from .ast_nodes import (
    Program, MainClass, ClassDecl, ClassDeclSimple, ClassDeclExtends,
    VarDecl, MethodDecl, Formal,
    TypeRef, IntArrayType, BooleanType, IntegerType, IdentifierType,
    Statement, Block, If, While, Print, Assign, ArrayAssign,
    Expression, BinaryExp, And, LessThan, Plus, Minus, Times,
    ArrayLookup, ArrayLength, Call, IntegerLiteral, TrueLiteral, FalseLiteral,
    IdentifierExp, This, NewArray, NewObject, Not,
    Identifier, Missing
)
from .errors import (
    ParseError, SyntaxErrorRecovery, Expected,
    create_unexpected_token_error, create_nesting_too_deep_error,
)

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Binding strength of the expression operators."""
    NONE = -1
    AND = 10            # &&
    LESS_THAN = 20      # <
    TERM = 30           # +, -
    FACTOR = 40         # *
    POSTFIX = 50        # [i], .length, .m(...); bound by the suffix loop


BINOP_LEVELS: Dict[TokenType, Precedence] = {
    TokenType.LOGICAL_AND: Precedence.AND,
    TokenType.LESS_THAN: Precedence.LESS_THAN,
    TokenType.PLUS: Precedence.TERM,
    TokenType.MINUS: Precedence.TERM,
    TokenType.MULTIPLY: Precedence.FACTOR,
}

BINARY_NODES: Dict[TokenType, Type[BinaryExp]] = {
    TokenType.LOGICAL_AND: And,
    TokenType.LESS_THAN: LessThan,
    TokenType.PLUS: Plus,
    TokenType.MINUS: Minus,
    TokenType.MULTIPLY: Times,
}

CLASS_BOUNDARIES = SyntaxErrorRecovery.CLASS_BOUNDARIES
MEMBER_BOUNDARIES = SyntaxErrorRecovery.MEMBER_BOUNDARIES
MAIN_CLASS_HEADER = SyntaxErrorRecovery.MAIN_CLASS_HEADER
STATEMENT_BOUNDARIES = SyntaxErrorRecovery.STATEMENT_BOUNDARIES
EXPRESSION_BOUNDARIES = SyntaxErrorRecovery.EXPRESSION_BOUNDARIES
STATEMENT_STARTS = SyntaxErrorRecovery.STATEMENT_STARTS

TYPE_STARTS = frozenset({TokenType.INT, TokenType.BOOLEAN, TokenType.IDENTIFIER})

# Tokens that end the declarations and statements of a method body
METHOD_BODY_END = frozenset({
    TokenType.RETURN,
    TokenType.RIGHT_BRACE,
    TokenType.PUBLIC,
    TokenType.CLASS,
    TokenType.EOF,
})

# Statements and expressions nested deeper than this are skipped; each level
# costs several interpreter frames
MAX_NESTING_DEPTH = 100

Follow = FrozenSet[TokenType]


class Parser:
    """
    MiniJava recursive-descent parser.

    Every ``_parse_*`` method takes the follow set of its caller: the token
    types at which error recovery stops discarding input.
    """

    def __init__(self, lexer: Lexer):
        """
        Initialize the parser and prime the first token.

        Args:
            lexer: Token source; the parser is its only consumer
        """
        self.lexer = lexer
        self.errors: List[ParseError] = []
        self._position = 0
        self._last_error_position = -1
        self._depth = 0
        self.token: Token = lexer.next_token()

    @property
    def error_count(self) -> int:
        """Number of syntax errors recorded so far."""
        return len(self.errors)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def parse_program(self) -> Program:
        """
        Parse a complete program: MainClass ClassDecl*

        Never raises for malformed input; check ``error_count`` afterwards.
        """
        main_class = self._parse_main_class(CLASS_BOUNDARIES)

        class_decls: List[ClassDecl] = []
        while self.token.type != TokenType.EOF:
            start = self._position
            if self.token.type == TokenType.CLASS:
                class_decls.append(self._parse_class_decl(CLASS_BOUNDARIES))
            else:
                self._error(TokenType.CLASS)
                self._synchronize(CLASS_BOUNDARIES)
            self._ensure_progress(start)

        logger.info("%s: %d syntax error(s)", self.lexer.filename, self.error_count)
        return Program(main_class, tuple(class_decls))

    # ========================================================================
    # Classes
    # ========================================================================

    def _parse_main_class(self, follow: Follow) -> MainClass:
        """class Id { public static void main ( String [ ] Id ) { Statement } }"""
        header = follow | MAIN_CLASS_HEADER

        self._eat(TokenType.CLASS, header)
        name = self._parse_identifier(header)
        self._eat(TokenType.LEFT_BRACE, header)
        self._eat(TokenType.PUBLIC, header)
        self._eat(TokenType.STATIC, header)
        self._eat(TokenType.VOID, header)
        self._eat(TokenType.MAIN, header)
        self._eat(TokenType.LEFT_PAREN, header)
        self._eat(TokenType.STRING, header)
        self._eat(TokenType.LEFT_BRACKET, header)
        self._eat(TokenType.RIGHT_BRACKET, header)
        arg_name = self._parse_identifier(header)
        self._eat(TokenType.RIGHT_PAREN, header)
        self._eat(TokenType.LEFT_BRACE, follow | STATEMENT_BOUNDARIES)

        statement = self._parse_statement(follow | STATEMENT_BOUNDARIES)

        self._eat(TokenType.RIGHT_BRACE, follow)
        self._eat(TokenType.RIGHT_BRACE, follow)

        return MainClass(name, arg_name, statement)

    def _parse_class_decl(self, follow: Follow) -> ClassDecl:
        """class Id [extends Id] { (Field | Method)* }"""
        body = follow | MEMBER_BOUNDARIES
        header = body | {TokenType.LEFT_BRACE, TokenType.EXTENDS}

        self._eat(TokenType.CLASS, header)
        name = self._parse_identifier(header)

        super_name = None
        if self.token.type == TokenType.EXTENDS:
            self._advance()
            super_name = self._parse_identifier(body | {TokenType.LEFT_BRACE})

        self._eat(TokenType.LEFT_BRACE, body)

        fields: List[VarDecl] = []
        methods: List[MethodDecl] = []
        while self.token.type not in (TokenType.RIGHT_BRACE, TokenType.CLASS, TokenType.EOF):
            start = self._position
            if self.token.type == TokenType.PUBLIC:
                methods.append(self._parse_method_decl(body))
            elif self.token.type in TYPE_STARTS:
                fields.append(self._parse_var_decl(body))
            else:
                self._error("declaration")
                self._synchronize(body | TYPE_STARTS)
            self._ensure_progress(start)

        self._eat(TokenType.RIGHT_BRACE, follow)

        if super_name is None:
            return ClassDeclSimple(name, tuple(fields), tuple(methods))
        return ClassDeclExtends(name, super_name, tuple(fields), tuple(methods))

    # ========================================================================
    # Declarations
    # ========================================================================

    def _parse_var_decl(self, follow: Follow) -> VarDecl:
        """Type Id ;"""
        var_type = self._parse_type(follow | {TokenType.IDENTIFIER, TokenType.SEMICOLON})
        name = self._parse_identifier(follow | {TokenType.SEMICOLON})
        self._eat(TokenType.SEMICOLON, follow)
        return VarDecl(var_type, name)

    def _parse_formal(self, follow: Follow) -> Formal:
        formal_type = self._parse_type(follow | {TokenType.IDENTIFIER})
        name = self._parse_identifier(follow)
        return Formal(formal_type, name)

    def _parse_method_decl(self, follow: Follow) -> MethodDecl:
        """
        public Type Id ( Formals ) { VarDecl* Statement* return Exp ; }

        Declarations may appear between statements; an identifier followed
        by another identifier starts a declaration of a class-typed local.
        """
        body = follow | STATEMENT_BOUNDARIES
        header = body | {TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.COMMA}

        self._eat(TokenType.PUBLIC, header)
        return_type = self._parse_type(header | {TokenType.IDENTIFIER})
        name = self._parse_identifier(header)

        self._eat(TokenType.LEFT_PAREN, header)
        params: List[Formal] = []
        if self.token.type in TYPE_STARTS:
            params.append(self._parse_formal(header))
            while self.token.type == TokenType.COMMA:
                self._advance()
                params.append(self._parse_formal(header))
        self._eat(TokenType.RIGHT_PAREN, header)
        self._eat(TokenType.LEFT_BRACE, body)

        local_vars: List[VarDecl] = []
        statements: List[Statement] = []
        while self.token.type not in METHOD_BODY_END:
            start = self._position
            if self._at_var_decl():
                local_vars.append(self._parse_var_decl(body))
            else:
                statements.append(self._parse_statement(body))
            self._ensure_progress(start)

        if self.token.type == TokenType.RETURN:
            self._advance()
            return_exp = self._parse_exp(body)
            self._eat(TokenType.SEMICOLON, body)
        else:
            self._error(TokenType.RETURN)
            return_exp = Missing("expression")

        self._eat(TokenType.RIGHT_BRACE, follow)

        return MethodDecl(return_type, name, tuple(params), tuple(local_vars),
                          tuple(statements), return_exp)

    def _at_var_decl(self) -> bool:
        if self.token.type in (TokenType.INT, TokenType.BOOLEAN):
            return True
        return (self.token.type == TokenType.IDENTIFIER
                and self.lexer.peek().type == TokenType.IDENTIFIER)

    def _parse_type(self, follow: Follow) -> TypeRef:
        """int [ ] | boolean | int | Id"""
        if self.token.type == TokenType.INT:
            self._advance()
            if self.token.type == TokenType.LEFT_BRACKET:
                self._advance()
                self._eat(TokenType.RIGHT_BRACKET, follow)
                return IntArrayType()
            return IntegerType()

        if self.token.type == TokenType.BOOLEAN:
            self._advance()
            return BooleanType()

        if self.token.type == TokenType.IDENTIFIER:
            name = self.lexer.id_value
            self._advance()
            return IdentifierType(name)

        self._error("type")
        self._synchronize(follow)
        return Missing("type")

    def _parse_identifier(self, follow: Follow) -> Union[Identifier, Missing]:
        if self.token.type != TokenType.IDENTIFIER:
            self._error(TokenType.IDENTIFIER)
            self._synchronize(follow | {TokenType.IDENTIFIER})
            if self.token.type != TokenType.IDENTIFIER:
                return Missing("identifier")

        identifier = Identifier(self.lexer.id_value)
        self._advance()
        return identifier

    # ========================================================================
    # Statements
    # ========================================================================

    def _parse_statement(self, follow: Follow) -> Statement:
        if self._depth >= MAX_NESTING_DEPTH:
            return self._too_deep("statement", follow)

        token_type = self.token.type
        self._depth += 1
        try:
            if token_type == TokenType.LEFT_BRACE:
                return self._parse_block(follow)
            if token_type == TokenType.IF:
                return self._parse_if(follow)
            if token_type == TokenType.WHILE:
                return self._parse_while(follow)
            if token_type == TokenType.IDENTIFIER:
                return self._parse_identifier_statement(follow)

            return self._statement_error(follow, "statement")
        finally:
            self._depth -= 1

    def _parse_block(self, follow: Follow) -> Block:
        """{ Statement* }"""
        self._eat(TokenType.LEFT_BRACE, follow)

        statements: List[Statement] = []
        while self._in_statement_list(follow):
            start = self._position
            statements.append(self._parse_statement(follow))
            self._ensure_progress(start)

        self._eat(TokenType.RIGHT_BRACE, follow)
        return Block(tuple(statements))

    def _in_statement_list(self, follow: Follow) -> bool:
        token_type = self.token.type
        if token_type == TokenType.EOF:
            return False
        return (token_type in STATEMENT_STARTS
                or token_type == TokenType.SEMICOLON
                or token_type not in follow)

    def _parse_if(self, follow: Follow) -> If:
        """if ( Exp ) Statement else Statement"""
        self._advance()
        condition = self._parse_condition(follow)
        then_stm = self._parse_statement(follow)
        self._eat(TokenType.ELSE, follow | STATEMENT_STARTS)
        else_stm = self._parse_statement(follow)
        return If(condition, then_stm, else_stm)

    def _parse_while(self, follow: Follow) -> While:
        """while ( Exp ) Statement"""
        self._advance()
        condition = self._parse_condition(follow)
        body = self._parse_statement(follow)
        return While(condition, body)

    def _parse_condition(self, follow: Follow) -> Expression:
        """( Exp )"""
        self._eat(TokenType.LEFT_PAREN, follow | STATEMENT_STARTS)
        condition = self._parse_exp(follow)
        self._eat(TokenType.RIGHT_PAREN, follow)
        return condition

    def _parse_identifier_statement(self, follow: Follow) -> Statement:
        """Print, assignment or array assignment, chosen by the token after the Id."""
        name = Identifier(self.lexer.id_value)
        self._advance()

        if name.name == "System" and self.token.type == TokenType.DOT:
            return self._parse_print(follow)

        if self.token.type == TokenType.ASSIGN:
            self._advance()
            value = self._parse_exp(follow)
            self._eat(TokenType.SEMICOLON, follow)
            return Assign(name, value)

        if self.token.type == TokenType.LEFT_BRACKET:
            self._advance()
            index = self._parse_exp(follow | {TokenType.ASSIGN})
            self._eat(TokenType.RIGHT_BRACKET, follow | {TokenType.ASSIGN})
            self._eat(TokenType.ASSIGN, follow | STATEMENT_STARTS)
            value = self._parse_exp(follow)
            self._eat(TokenType.SEMICOLON, follow)
            return ArrayAssign(name, index, value)

        return self._statement_error(follow, TokenType.ASSIGN)

    def _parse_print(self, follow: Follow) -> Statement:
        """System . out . println ( Exp ) ;  (after 'System')"""
        self._advance()
        if not self._eat_name("out"):
            return self._statement_error(follow, "'out'")
        self._eat(TokenType.DOT, follow)
        if not self._eat_name("println"):
            return self._statement_error(follow, "'println'")

        self._eat(TokenType.LEFT_PAREN, follow)
        exp = self._parse_exp(follow)
        self._eat(TokenType.RIGHT_PAREN, follow)
        self._eat(TokenType.SEMICOLON, follow)
        return Print(exp)

    def _eat_name(self, name: str) -> bool:
        """Consume an identifier with a fixed spelling."""
        if self.token.type == TokenType.IDENTIFIER and self.lexer.id_value == name:
            self._advance()
            return True
        return False

    def _statement_error(self, follow: Follow, expected: Expected) -> Missing:
        """Report a malformed statement and skip past its terminating ';'."""
        self._error(expected)
        self._synchronize(follow | {TokenType.SEMICOLON})
        if self.token.type == TokenType.SEMICOLON:
            self._advance()
        return Missing("statement")

    # ========================================================================
    # Expressions
    # ========================================================================

    def _parse_exp(self, follow: Follow) -> Expression:
        """Parse an expression: Unary (Binop Unary)*"""
        follow = follow | EXPRESSION_BOUNDARIES
        lhs = self._parse_unary(follow)
        return self._parse_binop_rhs(Precedence.AND, lhs, follow)

    def _parse_binop_rhs(self, min_level: int, lhs: Expression, follow: Follow) -> Expression:
        """
        Precedence climbing over the binary operators.

        Folds operators of level >= min_level into lhs, left to right. When
        the operator after a right-hand operand binds tighter than the
        current one, the right-hand side is first extended recursively.
        """
        while True:
            level = self._level(self.token.type)
            if level < min_level:
                return lhs

            operator = self.token.type
            self._advance()
            rhs = self._parse_unary(follow)

            if self._level(self.token.type) > level:
                rhs = self._parse_binop_rhs(level + 1, rhs, follow)

            lhs = BINARY_NODES[operator](lhs, rhs)

    @staticmethod
    def _level(token_type: TokenType) -> int:
        return BINOP_LEVELS.get(token_type, Precedence.NONE)

    def _parse_unary(self, follow: Follow) -> Expression:
        """! Unary | Primary Suffix*"""
        if self._depth >= MAX_NESTING_DEPTH:
            return self._too_deep("expression", follow)

        self._depth += 1
        try:
            if self.token.type == TokenType.LOGICAL_NOT:
                self._advance()
                return Not(self._parse_unary(follow))
            return self._parse_postfix(self._parse_primary(follow), follow)
        finally:
            self._depth -= 1

    def _parse_postfix(self, exp: Expression, follow: Follow) -> Expression:
        """Apply [ Exp ], .length and .Id ( Args ) suffixes to exp."""
        while True:
            if self.token.type == TokenType.LEFT_BRACKET:
                self._advance()
                index = self._parse_exp(follow)
                self._eat(TokenType.RIGHT_BRACKET, follow)
                exp = ArrayLookup(exp, index)

            elif self.token.type == TokenType.DOT:
                self._advance()
                if self._eat_name("length"):
                    exp = ArrayLength(exp)
                    continue

                method_name = self._parse_identifier(follow | {TokenType.LEFT_PAREN})
                self._eat(TokenType.LEFT_PAREN, follow)
                args = self._parse_arguments(follow)
                self._eat(TokenType.RIGHT_PAREN, follow)
                exp = Call(exp, method_name, args)

            else:
                return exp

    def _parse_arguments(self, follow: Follow) -> Tuple[Expression, ...]:
        args: List[Expression] = []
        if self.token.type != TokenType.RIGHT_PAREN:
            args.append(self._parse_exp(follow))
            while self.token.type == TokenType.COMMA:
                self._advance()
                args.append(self._parse_exp(follow))
        return tuple(args)

    def _parse_primary(self, follow: Follow) -> Expression:
        token_type = self.token.type

        if token_type == TokenType.INTEGER_LITERAL:
            value = self.lexer.int_value
            self._advance()
            return IntegerLiteral(value)

        if token_type == TokenType.TRUE:
            self._advance()
            return TrueLiteral()

        if token_type == TokenType.FALSE:
            self._advance()
            return FalseLiteral()

        if token_type == TokenType.THIS:
            self._advance()
            return This()

        if token_type == TokenType.IDENTIFIER:
            name = self.lexer.id_value
            self._advance()
            return IdentifierExp(name)

        if token_type == TokenType.LEFT_PAREN:
            self._advance()
            exp = self._parse_exp(follow)
            self._eat(TokenType.RIGHT_PAREN, follow)
            return exp

        if token_type == TokenType.NEW:
            return self._parse_new(follow)

        self._error("expression")
        self._synchronize(follow)
        return Missing("expression")

    def _parse_new(self, follow: Follow) -> Expression:
        """new int [ Exp ] | new Id ( )"""
        self._advance()

        if self.token.type == TokenType.INT:
            self._advance()
            self._eat(TokenType.LEFT_BRACKET, follow)
            size = self._parse_exp(follow)
            self._eat(TokenType.RIGHT_BRACKET, follow)
            return NewArray(size)

        type_name = self._parse_identifier(follow | {TokenType.LEFT_PAREN})
        self._eat(TokenType.LEFT_PAREN, follow)
        self._eat(TokenType.RIGHT_PAREN, follow)
        return NewObject(type_name)

    # ========================================================================
    # Token handling and recovery
    # ========================================================================

    def _advance(self) -> Token:
        """Consume the current token and return the next one."""
        self.token = self.lexer.next_token()
        self._position += 1
        return self.token

    def _eat(self, expected: TokenType, follow: Follow) -> bool:
        """
        Consume a token of the expected type.

        On a mismatch, report it and resynchronize on ``follow`` plus the
        expected type; if the expected token turns up it is consumed.

        Returns:
            True if the expected token was current on entry
        """
        if self.token.type == expected:
            self._advance()
            return True

        self._error(expected)
        self._synchronize(follow | {expected})
        if self.token.type == expected:
            self._advance()
        return False

    def _error(self, expected: Expected):
        self._record(create_unexpected_token_error(expected, self.token, self.lexer.filename))

    def _record(self, error: ParseError):
        """Record a syntax error for the current token, at most once per token."""
        if self._position == self._last_error_position:
            return
        self._last_error_position = self._position

        self.errors.append(error)
        logger.debug("%s: %s", error.diagnostic.location, error.diagnostic.message)

    def _synchronize(self, follow: Follow):
        self.token, skipped = SyntaxErrorRecovery.synchronize(self.token, self._advance, follow)
        if skipped:
            logger.debug("resynchronized at %s after skipping %d token(s)", self.token, skipped)

    def _too_deep(self, category: str, follow: Follow) -> Missing:
        """Report a construct nested past MAX_NESTING_DEPTH and skip over it."""
        self._record(create_nesting_too_deep_error(
            category, self.token, MAX_NESTING_DEPTH, self.lexer.filename
        ))
        self.token, skipped = SyntaxErrorRecovery.skip_group(self.token, self._advance, follow)
        logger.debug("skipped %d token(s) nested past depth %d", skipped, MAX_NESTING_DEPTH)
        return Missing(category)

    def _ensure_progress(self, start: int):
        """Skip one token if a list iteration consumed nothing."""
        if self._position == start and self.token.type != TokenType.EOF:
            self._advance()


def parse_string(source: str, filename: str = "<string>",
                 tab_width: int = DEFAULT_TAB_WIDTH) -> Tuple[Program, Parser]:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        tab_width: Number of columns a tab character advances

    Returns:
        The (best-effort) Program and the parser, whose ``errors`` and
        ``error_count`` describe any syntax errors
    """
    parser = Parser(Lexer(source, filename, tab_width))
    return parser.parse_program(), parser


def parse_file(filepath: str, tab_width: int = DEFAULT_TAB_WIDTH) -> Tuple[Program, Parser]:
    """
    Convenience function to parse a source file.

    Args:
        filepath: Path to source file
        tab_width: Number of columns a tab character advances

    Returns:
        The Program and the parser that built it

    Raises:
        OSError: If file cannot be read
    """
    with open(filepath, "r", encoding="utf-8", errors="replace", newline="") as f:
        parser = Parser(Lexer(f, filepath, tab_width))
        return parser.parse_program(), parser
