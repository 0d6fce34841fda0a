"""Assembly, printing and Acorn services package."""

from jstree.services.tree_view import TreeView, TreeViewError
from jstree.services.assembler import parse_node, parse_program
from jstree.services.concurrent_assembler import (
    ConcurrentAssembler,
    parse_program_concurrently,
)
from jstree.services.printer import TreePrinter, format_tree, print_tree
from jstree.services.acorn import AcornRunner, parse_file

__all__ = [
    'TreeView',
    'TreeViewError',
    'parse_node',
    'parse_program',
    'ConcurrentAssembler',
    'parse_program_concurrently',
    'TreePrinter',
    'format_tree',
    'print_tree',
    'AcornRunner',
    'parse_file',
]
