"""
MiniJava Visitor Package

Ready-made AST visitors:
- DepthFirstVisitor: walks every node, base class for analyses
- MissingNodeCollector / find_missing: locate nodes left by error recovery
- PrettyPrintVisitor / pretty_print: render a tree back to source text
"""

from .depth_first import DepthFirstVisitor, MissingNodeCollector, find_missing
from .pretty_printer import PrettyPrintVisitor, pretty_print

__all__ = [
    "DepthFirstVisitor",
    "MissingNodeCollector",
    "find_missing",
    "PrettyPrintVisitor",
    "pretty_print",
]
