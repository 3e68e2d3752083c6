"""
Depth-first traversal of the MiniJava AST.

DepthFirstVisitor visits every child of every node in source order and
returns nothing. Subclasses override the visit_* methods they care about
and call generic_visit() to keep descending.
"""

from typing import List

from ..parser.ast_nodes import ASTNode, ASTVisitor, Missing


class DepthFirstVisitor(ASTVisitor):
    """Visitor that walks the whole tree and does nothing else."""

    def generic_visit(self, node: ASTNode):
        for child in node.children():
            child.accept(self)

    def visit_program(self, node):
        self.generic_visit(node)

    def visit_main_class(self, node):
        self.generic_visit(node)

    def visit_class_decl_simple(self, node):
        self.generic_visit(node)

    def visit_class_decl_extends(self, node):
        self.generic_visit(node)

    def visit_var_decl(self, node):
        self.generic_visit(node)

    def visit_method_decl(self, node):
        self.generic_visit(node)

    def visit_formal(self, node):
        self.generic_visit(node)

    def visit_int_array_type(self, node):
        pass

    def visit_boolean_type(self, node):
        pass

    def visit_integer_type(self, node):
        pass

    def visit_identifier_type(self, node):
        pass

    def visit_block(self, node):
        self.generic_visit(node)

    def visit_if(self, node):
        self.generic_visit(node)

    def visit_while(self, node):
        self.generic_visit(node)

    def visit_print(self, node):
        self.generic_visit(node)

    def visit_assign(self, node):
        self.generic_visit(node)

    def visit_array_assign(self, node):
        self.generic_visit(node)

    def visit_and(self, node):
        self.generic_visit(node)

    def visit_less_than(self, node):
        self.generic_visit(node)

    def visit_plus(self, node):
        self.generic_visit(node)

    def visit_minus(self, node):
        self.generic_visit(node)

    def visit_times(self, node):
        self.generic_visit(node)

    def visit_array_lookup(self, node):
        self.generic_visit(node)

    def visit_array_length(self, node):
        self.generic_visit(node)

    def visit_call(self, node):
        self.generic_visit(node)

    def visit_integer_literal(self, node):
        pass

    def visit_true(self, node):
        pass

    def visit_false(self, node):
        pass

    def visit_identifier_exp(self, node):
        pass

    def visit_this(self, node):
        pass

    def visit_new_array(self, node):
        self.generic_visit(node)

    def visit_new_object(self, node):
        self.generic_visit(node)

    def visit_not(self, node):
        self.generic_visit(node)

    def visit_identifier(self, node):
        pass

    def visit_missing(self, node):
        pass


class MissingNodeCollector(DepthFirstVisitor):
    """Collects every Missing node left behind by error recovery."""

    def __init__(self):
        self.missing: List[Missing] = []

    def visit_missing(self, node: Missing):
        self.missing.append(node)


def find_missing(node: ASTNode) -> List[Missing]:
    """Return the Missing nodes under node, in source order."""
    collector = MissingNodeCollector()
    node.accept(collector)
    return collector.missing
