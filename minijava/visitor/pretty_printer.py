"""
Pretty printer for the MiniJava AST.

Renders a tree back to MiniJava source. Every binary and ``!`` expression
is fully parenthesized, so the printed text parses back to a tree equal to
the one it was printed from.
"""

from typing import Iterable

from ..parser.ast_nodes import (
    ASTNode, ASTVisitor, BinaryExp, Missing, Statement,
    Program, MainClass, ClassDeclSimple, ClassDeclExtends, VarDecl, MethodDecl
)

INDENT = "    "


class PrettyPrintVisitor(ASTVisitor):
    """
    Visitor returning the source text of each node.

    Statements come back as complete lines indented to the current depth;
    expressions, types and names come back as inline fragments.
    """

    def __init__(self):
        self.depth = 0

    def _pad(self) -> str:
        return INDENT * self.depth

    def _statement(self, node: Statement, depth: int) -> str:
        saved, self.depth = self.depth, depth
        try:
            text = node.accept(self)
            if isinstance(node, Missing):
                text = self._pad() + text
            return text
        finally:
            self.depth = saved

    def _join(self, nodes: Iterable[ASTNode], separator: str = ", ") -> str:
        return separator.join(node.accept(self) for node in nodes)

    # ========================================================================
    # Classes and declarations
    # ========================================================================

    def visit_program(self, node: Program) -> str:
        parts = [node.main_class.accept(self)]
        parts.extend(decl.accept(self) for decl in node.class_decls)
        return "\n".join(parts)

    def visit_main_class(self, node: MainClass) -> str:
        lines = [
            f"class {node.name.accept(self)} {{",
            f"{INDENT}public static void main(String[] {node.arg_name.accept(self)}) {{",
            self._statement(node.statement, 2),
            f"{INDENT}}}",
            "}",
        ]
        return "\n".join(lines) + "\n"

    def _class_body(self, header: str, fields, methods) -> str:
        lines = [header]
        lines.extend(INDENT + field.accept(self) for field in fields)
        for method in methods:
            if len(lines) > 1:
                lines.append("")
            lines.append(method.accept(self))
        lines.append("}")
        return "\n".join(lines) + "\n"

    def visit_class_decl_simple(self, node: ClassDeclSimple) -> str:
        header = f"class {node.name.accept(self)} {{"
        return self._class_body(header, node.fields, node.methods)

    def visit_class_decl_extends(self, node: ClassDeclExtends) -> str:
        header = f"class {node.name.accept(self)} extends {node.super_name.accept(self)} {{"
        return self._class_body(header, node.fields, node.methods)

    def visit_var_decl(self, node: VarDecl) -> str:
        return f"{node.type.accept(self)} {node.name.accept(self)};"

    def visit_method_decl(self, node: MethodDecl) -> str:
        pad = INDENT * 2
        lines = [
            f"{INDENT}public {node.return_type.accept(self)} {node.name.accept(self)}"
            f"({self._join(node.params)}) {{"
        ]
        lines.extend(pad + local.accept(self) for local in node.locals)
        lines.extend(self._statement(stm, 2) for stm in node.statements)
        lines.append(f"{pad}return {node.return_exp.accept(self)};")
        lines.append(f"{INDENT}}}")
        return "\n".join(lines)

    def visit_formal(self, node) -> str:
        return f"{node.type.accept(self)} {node.name.accept(self)}"

    def visit_int_array_type(self, node) -> str:
        return "int[]"

    def visit_boolean_type(self, node) -> str:
        return "boolean"

    def visit_integer_type(self, node) -> str:
        return "int"

    def visit_identifier_type(self, node) -> str:
        return node.name

    # ========================================================================
    # Statements
    # ========================================================================

    def visit_block(self, node) -> str:
        pad = self._pad()
        lines = [pad + "{"]
        lines.extend(self._statement(stm, self.depth + 1) for stm in node.statements)
        lines.append(pad + "}")
        return "\n".join(lines)

    def visit_if(self, node) -> str:
        pad = self._pad()
        return "\n".join([
            f"{pad}if ({node.condition.accept(self)})",
            self._statement(node.then_stm, self.depth + 1),
            f"{pad}else",
            self._statement(node.else_stm, self.depth + 1),
        ])

    def visit_while(self, node) -> str:
        return "\n".join([
            f"{self._pad()}while ({node.condition.accept(self)})",
            self._statement(node.body, self.depth + 1),
        ])

    def visit_print(self, node) -> str:
        return f"{self._pad()}System.out.println({node.exp.accept(self)});"

    def visit_assign(self, node) -> str:
        return f"{self._pad()}{node.name.accept(self)} = {node.value.accept(self)};"

    def visit_array_assign(self, node) -> str:
        return (f"{self._pad()}{node.name.accept(self)}[{node.index.accept(self)}]"
                f" = {node.value.accept(self)};")

    # ========================================================================
    # Expressions
    # ========================================================================

    def _binary(self, node: BinaryExp) -> str:
        return f"({node.lhs.accept(self)} {node.operator} {node.rhs.accept(self)})"

    visit_and = _binary
    visit_less_than = _binary
    visit_plus = _binary
    visit_minus = _binary
    visit_times = _binary

    def visit_array_lookup(self, node) -> str:
        return f"{node.array.accept(self)}[{node.index.accept(self)}]"

    def visit_array_length(self, node) -> str:
        return f"{node.array.accept(self)}.length"

    def visit_call(self, node) -> str:
        return (f"{node.callee.accept(self)}.{node.method_name.accept(self)}"
                f"({self._join(node.args)})")

    def visit_integer_literal(self, node) -> str:
        return str(node.value)

    def visit_true(self, node) -> str:
        return "true"

    def visit_false(self, node) -> str:
        return "false"

    def visit_identifier_exp(self, node) -> str:
        return node.name

    def visit_this(self, node) -> str:
        return "this"

    def visit_new_array(self, node) -> str:
        return f"new int[{node.size.accept(self)}]"

    def visit_new_object(self, node) -> str:
        return f"new {node.type_name.accept(self)}()"

    def visit_not(self, node) -> str:
        return f"(!{node.exp.accept(self)})"

    def visit_identifier(self, node) -> str:
        return node.name

    def visit_missing(self, node: Missing) -> str:
        return f"<missing {node.expected}>"


def pretty_print(node: ASTNode) -> str:
    """Render node as MiniJava source text."""
    return node.accept(PrettyPrintVisitor())
