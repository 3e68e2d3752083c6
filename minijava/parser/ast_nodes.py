"""
Abstract Syntax Tree node definitions for MiniJava.

Every node is a frozen dataclass: it is built fully formed by the parser,
never mutated afterwards, and compares structurally. Sequences are stored
as tuples. Each node exposes itself to an ASTVisitor through accept(),
which calls the one visit_* method for its kind.

A sub-tree the parser could not build is represented by a Missing node,
never by None.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Tuple


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    PROGRAM = "Program"
    MAIN_CLASS = "MainClass"
    CLASS_DECL_SIMPLE = "ClassDeclSimple"
    CLASS_DECL_EXTENDS = "ClassDeclExtends"

    # Declarations
    VAR_DECL = "VarDecl"
    METHOD_DECL = "MethodDecl"
    FORMAL = "Formal"

    # Types
    INT_ARRAY_TYPE = "IntArrayType"
    BOOLEAN_TYPE = "BooleanType"
    INTEGER_TYPE = "IntegerType"
    IDENTIFIER_TYPE = "IdentifierType"

    # Statements
    BLOCK = "Block"
    IF = "If"
    WHILE = "While"
    PRINT = "Print"
    ASSIGN = "Assign"
    ARRAY_ASSIGN = "ArrayAssign"

    # Expressions
    AND = "And"
    LESS_THAN = "LessThan"
    PLUS = "Plus"
    MINUS = "Minus"
    TIMES = "Times"
    ARRAY_LOOKUP = "ArrayLookup"
    ARRAY_LENGTH = "ArrayLength"
    CALL = "Call"
    INTEGER_LITERAL = "IntegerLiteral"
    TRUE = "True"
    FALSE = "False"
    IDENTIFIER_EXP = "IdentifierExp"
    THIS = "This"
    NEW_ARRAY = "NewArray"
    NEW_OBJECT = "NewObject"
    NOT = "Not"

    # Names
    IDENTIFIER = "Identifier"

    # Failed sub-parse
    MISSING = "Missing"


class ASTVisitor(ABC):
    """
    Visitor interface for traversing AST nodes.

    Declares one operation per node kind; node.accept(visitor) dispatches
    to the matching method and returns its result.
    """

    def visit(self, node: 'ASTNode') -> Any:
        """Visit any AST node."""
        return node.accept(self)

    @abstractmethod
    def visit_program(self, node: 'Program') -> Any: ...

    @abstractmethod
    def visit_main_class(self, node: 'MainClass') -> Any: ...

    @abstractmethod
    def visit_class_decl_simple(self, node: 'ClassDeclSimple') -> Any: ...

    @abstractmethod
    def visit_class_decl_extends(self, node: 'ClassDeclExtends') -> Any: ...

    @abstractmethod
    def visit_var_decl(self, node: 'VarDecl') -> Any: ...

    @abstractmethod
    def visit_method_decl(self, node: 'MethodDecl') -> Any: ...

    @abstractmethod
    def visit_formal(self, node: 'Formal') -> Any: ...

    @abstractmethod
    def visit_int_array_type(self, node: 'IntArrayType') -> Any: ...

    @abstractmethod
    def visit_boolean_type(self, node: 'BooleanType') -> Any: ...

    @abstractmethod
    def visit_integer_type(self, node: 'IntegerType') -> Any: ...

    @abstractmethod
    def visit_identifier_type(self, node: 'IdentifierType') -> Any: ...

    @abstractmethod
    def visit_block(self, node: 'Block') -> Any: ...

    @abstractmethod
    def visit_if(self, node: 'If') -> Any: ...

    @abstractmethod
    def visit_while(self, node: 'While') -> Any: ...

    @abstractmethod
    def visit_print(self, node: 'Print') -> Any: ...

    @abstractmethod
    def visit_assign(self, node: 'Assign') -> Any: ...

    @abstractmethod
    def visit_array_assign(self, node: 'ArrayAssign') -> Any: ...

    @abstractmethod
    def visit_and(self, node: 'And') -> Any: ...

    @abstractmethod
    def visit_less_than(self, node: 'LessThan') -> Any: ...

    @abstractmethod
    def visit_plus(self, node: 'Plus') -> Any: ...

    @abstractmethod
    def visit_minus(self, node: 'Minus') -> Any: ...

    @abstractmethod
    def visit_times(self, node: 'Times') -> Any: ...

    @abstractmethod
    def visit_array_lookup(self, node: 'ArrayLookup') -> Any: ...

    @abstractmethod
    def visit_array_length(self, node: 'ArrayLength') -> Any: ...

    @abstractmethod
    def visit_call(self, node: 'Call') -> Any: ...

    @abstractmethod
    def visit_integer_literal(self, node: 'IntegerLiteral') -> Any: ...

    @abstractmethod
    def visit_true(self, node: 'TrueLiteral') -> Any: ...

    @abstractmethod
    def visit_false(self, node: 'FalseLiteral') -> Any: ...

    @abstractmethod
    def visit_identifier_exp(self, node: 'IdentifierExp') -> Any: ...

    @abstractmethod
    def visit_this(self, node: 'This') -> Any: ...

    @abstractmethod
    def visit_new_array(self, node: 'NewArray') -> Any: ...

    @abstractmethod
    def visit_new_object(self, node: 'NewObject') -> Any: ...

    @abstractmethod
    def visit_not(self, node: 'Not') -> Any: ...

    @abstractmethod
    def visit_identifier(self, node: 'Identifier') -> Any: ...

    @abstractmethod
    def visit_missing(self, node: 'Missing') -> Any: ...


class ASTNode(ABC):
    """Base class for all AST nodes."""

    node_type: ClassVar[ASTNodeType]

    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""

    def children(self) -> Tuple['ASTNode', ...]:
        """Get all child nodes, in source order."""
        return ()

    def __str__(self) -> str:
        return self.node_type.value


class Statement(ASTNode):
    """Base class for statements."""


class Expression(ASTNode):
    """Base class for expressions."""


class TypeRef(ASTNode):
    """Base class for type references."""


class ClassDecl(ASTNode):
    """Base class for (non-main) class declarations."""


# ============================================================================
# Names and the missing marker
# ============================================================================

@dataclass(frozen=True)
class Identifier(ASTNode):
    """A declared name or a reference to one. No binding happens here."""
    name: str

    node_type: ClassVar[ASTNodeType] = ASTNodeType.IDENTIFIER

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_identifier(self)


@dataclass(frozen=True)
class Missing(Statement, Expression, TypeRef):
    """
    Placeholder for a sub-tree that failed to parse.

    ``expected`` names what should have been there ("statement",
    "expression", "type" or "identifier"). It can stand in any position,
    so traversals that do not check for it fail predictably in
    visit_missing.
    """
    expected: str

    node_type: ClassVar[ASTNodeType] = ASTNodeType.MISSING

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_missing(self)


# ============================================================================
# Top-level nodes
# ============================================================================

@dataclass(frozen=True)
class MainClass(ASTNode):
    """The class holding ``public static void main(String[] arg)``."""
    name: Identifier
    arg_name: Identifier
    statement: Statement

    node_type: ClassVar[ASTNodeType] = ASTNodeType.MAIN_CLASS

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_main_class(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.name, self.arg_name, self.statement)


@dataclass(frozen=True)
class Program(ASTNode):
    """Root AST node representing a complete program."""
    main_class: MainClass
    class_decls: Tuple[ClassDecl, ...]

    node_type: ClassVar[ASTNodeType] = ASTNodeType.PROGRAM

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_program(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.main_class,) + self.class_decls


# ============================================================================
# Declarations
# ============================================================================

@dataclass(frozen=True)
class VarDecl(ASTNode):
    """Field or local variable declaration: ``Type name;``."""
    type: TypeRef
    name: Identifier

    node_type: ClassVar[ASTNodeType] = ASTNodeType.VAR_DECL

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_var_decl(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.type, self.name)


@dataclass(frozen=True)
class Formal(ASTNode):
    """Method parameter: ``Type name``."""
    type: TypeRef
    name: Identifier

    node_type: ClassVar[ASTNodeType] = ASTNodeType.FORMAL

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_formal(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.type, self.name)


@dataclass(frozen=True)
class MethodDecl(ASTNode):
    """Method declaration; every method ends in exactly one return."""
    return_type: TypeRef
    name: Identifier
    params: Tuple[Formal, ...]
    locals: Tuple[VarDecl, ...]
    statements: Tuple[Statement, ...]
    return_exp: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.METHOD_DECL

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_method_decl(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return ((self.return_type, self.name) + self.params + self.locals
                + self.statements + (self.return_exp,))


@dataclass(frozen=True)
class ClassDeclSimple(ClassDecl):
    """Class declaration without a superclass."""
    name: Identifier
    fields: Tuple[VarDecl, ...]
    methods: Tuple[MethodDecl, ...]

    node_type: ClassVar[ASTNodeType] = ASTNodeType.CLASS_DECL_SIMPLE

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_class_decl_simple(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.name,) + self.fields + self.methods


@dataclass(frozen=True)
class ClassDeclExtends(ClassDecl):
    """Class declaration with an ``extends`` clause."""
    name: Identifier
    super_name: Identifier
    fields: Tuple[VarDecl, ...]
    methods: Tuple[MethodDecl, ...]

    node_type: ClassVar[ASTNodeType] = ASTNodeType.CLASS_DECL_EXTENDS

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_class_decl_extends(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.name, self.super_name) + self.fields + self.methods


# ============================================================================
# Type system
# ============================================================================

@dataclass(frozen=True)
class IntArrayType(TypeRef):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.INT_ARRAY_TYPE

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_int_array_type(self)


@dataclass(frozen=True)
class BooleanType(TypeRef):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.BOOLEAN_TYPE

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_boolean_type(self)


@dataclass(frozen=True)
class IntegerType(TypeRef):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.INTEGER_TYPE

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_integer_type(self)


@dataclass(frozen=True)
class IdentifierType(TypeRef):
    """Class type referenced by name."""
    name: str

    node_type: ClassVar[ASTNodeType] = ASTNodeType.IDENTIFIER_TYPE

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_identifier_type(self)


# ============================================================================
# Statements
# ============================================================================

@dataclass(frozen=True)
class Block(Statement):
    """``{ Statement* }``"""
    statements: Tuple[Statement, ...]

    node_type: ClassVar[ASTNodeType] = ASTNodeType.BLOCK

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_block(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return self.statements


@dataclass(frozen=True)
class If(Statement):
    """If statement; the else branch is mandatory."""
    condition: Expression
    then_stm: Statement
    else_stm: Statement

    node_type: ClassVar[ASTNodeType] = ASTNodeType.IF

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_if(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.condition, self.then_stm, self.else_stm)


@dataclass(frozen=True)
class While(Statement):
    condition: Expression
    body: Statement

    node_type: ClassVar[ASTNodeType] = ASTNodeType.WHILE

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_while(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.condition, self.body)


@dataclass(frozen=True)
class Print(Statement):
    """``System.out.println(exp);``"""
    exp: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.PRINT

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_print(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.exp,)


@dataclass(frozen=True)
class Assign(Statement):
    name: Identifier
    value: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.ASSIGN

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_assign(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.name, self.value)


@dataclass(frozen=True)
class ArrayAssign(Statement):
    """``name[index] = value;``"""
    name: Identifier
    index: Expression
    value: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.ARRAY_ASSIGN

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_array_assign(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.name, self.index, self.value)


# ============================================================================
# Expressions
# ============================================================================

@dataclass(frozen=True)
class BinaryExp(Expression):
    """Base class for the five binary operators."""
    lhs: Expression
    rhs: Expression

    operator: ClassVar[str]

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.lhs, self.rhs)


@dataclass(frozen=True)
class And(BinaryExp):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.AND
    operator: ClassVar[str] = "&&"

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_and(self)


@dataclass(frozen=True)
class LessThan(BinaryExp):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.LESS_THAN
    operator: ClassVar[str] = "<"

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_less_than(self)


@dataclass(frozen=True)
class Plus(BinaryExp):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.PLUS
    operator: ClassVar[str] = "+"

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_plus(self)


@dataclass(frozen=True)
class Minus(BinaryExp):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.MINUS
    operator: ClassVar[str] = "-"

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_minus(self)


@dataclass(frozen=True)
class Times(BinaryExp):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.TIMES
    operator: ClassVar[str] = "*"

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_times(self)


@dataclass(frozen=True)
class ArrayLookup(Expression):
    """``array[index]``"""
    array: Expression
    index: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.ARRAY_LOOKUP

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_array_lookup(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.array, self.index)


@dataclass(frozen=True)
class ArrayLength(Expression):
    """``array.length``"""
    array: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.ARRAY_LENGTH

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_array_length(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.array,)


@dataclass(frozen=True)
class Call(Expression):
    """Method call ``callee.method_name(args)``; callee is the receiver."""
    callee: Expression
    method_name: Identifier
    args: Tuple[Expression, ...]

    node_type: ClassVar[ASTNodeType] = ASTNodeType.CALL

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_call(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.callee, self.method_name) + self.args


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    node_type: ClassVar[ASTNodeType] = ASTNodeType.INTEGER_LITERAL

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_integer_literal(self)


@dataclass(frozen=True)
class TrueLiteral(Expression):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.TRUE

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_true(self)


@dataclass(frozen=True)
class FalseLiteral(Expression):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.FALSE

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_false(self)


@dataclass(frozen=True)
class IdentifierExp(Expression):
    """A variable reference used as an expression."""
    name: str

    node_type: ClassVar[ASTNodeType] = ASTNodeType.IDENTIFIER_EXP

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_identifier_exp(self)


@dataclass(frozen=True)
class This(Expression):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.THIS

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_this(self)


@dataclass(frozen=True)
class NewArray(Expression):
    """``new int[size]``"""
    size: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.NEW_ARRAY

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_new_array(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.size,)


@dataclass(frozen=True)
class NewObject(Expression):
    """``new TypeName()``"""
    type_name: Identifier

    node_type: ClassVar[ASTNodeType] = ASTNodeType.NEW_OBJECT

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_new_object(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.type_name,)


@dataclass(frozen=True)
class Not(Expression):
    exp: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.NOT

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_not(self)

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.exp,)


# Alias for the main AST type
AST = Program
