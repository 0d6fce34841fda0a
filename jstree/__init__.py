"""
jstree: typed JavaScript ASTs assembled from Acorn's ESTree JSON.
"""

from jstree.models import (
    AcornError,
    AssemblyTimeout,
    MalformedNode,
    NestingTooDeep,
    ParseError,
    Program,
    UnexpectedKind,
    UnknownNodeKind,
)
from jstree.services import (
    AcornRunner,
    ConcurrentAssembler,
    TreePrinter,
    TreeView,
    format_tree,
    parse_file,
    parse_node,
    parse_program,
    parse_program_concurrently,
    print_tree,
)

__version__ = "0.1.0"

__all__ = [
    "Program",
    "TreeView",
    "parse_node",
    "parse_program",
    "parse_program_concurrently",
    "ConcurrentAssembler",
    "TreePrinter",
    "print_tree",
    "format_tree",
    "AcornRunner",
    "parse_file",
    "ParseError",
    "UnknownNodeKind",
    "UnexpectedKind",
    "MalformedNode",
    "NestingTooDeep",
    "AssemblyTimeout",
    "AcornError",
]
