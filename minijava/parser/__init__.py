"""
MiniJava Parser Package

Implements a recursive descent parser for MiniJava that builds an immutable
Abstract Syntax Tree.

Key Features:
- Precedence climbing for binary operators
- Postfix parsing of array indexing, .length and method calls
- Panic-mode error recovery driven by follow sets
- Explicit Missing nodes for sub-trees that failed to parse
- Visitor interface over the closed set of node kinds
"""

from .ast_nodes import *
from .parser import Parser, Precedence, parse_string, parse_file
from .errors import ParseError, SyntaxErrorRecovery

__all__ = [
    # Core parser
    "Parser", "Precedence", "parse_string", "parse_file",

    # AST infrastructure
    "AST", "ASTNode", "ASTNodeType", "ASTVisitor",
    "Statement", "Expression", "TypeRef", "ClassDecl", "BinaryExp",

    # AST nodes
    "Program", "MainClass", "ClassDeclSimple", "ClassDeclExtends",
    "VarDecl", "MethodDecl", "Formal",
    "IntArrayType", "BooleanType", "IntegerType", "IdentifierType",
    "Block", "If", "While", "Print", "Assign", "ArrayAssign",
    "And", "LessThan", "Plus", "Minus", "Times",
    "ArrayLookup", "ArrayLength", "Call", "IntegerLiteral",
    "TrueLiteral", "FalseLiteral", "IdentifierExp", "This",
    "NewArray", "NewObject", "Not", "Identifier", "Missing",

    # Error handling
    "ParseError", "SyntaxErrorRecovery",
]
