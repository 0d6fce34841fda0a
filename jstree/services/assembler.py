"""
Sequential AST assembler.

Converts a TreeView over Acorn's ESTree JSON into the typed node models,
depth first and in document order. ``parse_node`` is the single recursive
entry point; the concurrent assembler reuses it for each top-level statement.
"""

import json
from itertools import count
from typing import Callable, Dict, List, Optional, Tuple, Type

from pydantic import ValidationError

from jstree.models.error import MalformedNode, NestingTooDeep, UnexpectedKind, UnknownNodeKind
from jstree.models.node import (
    AnyNode,
    BaseNode,
    BinaryExpression,
    BlockStatement,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    ExportSpecifier,
    ExpressionStatement,
    ForStatement,
    FunctionDeclaration,
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportSpecifier,
    Literal,
    Position,
    Program,
    ReturnStatement,
    UpdateExpression,
    VariableDeclaration,
    VariableDeclarator,
    walk,
)
from jstree.services.tree_view import TreeView, TreeViewError
from jstree.utils.logging import get_logger, log_assembly_phase
from jstree.utils.metrics import AssemblyMetrics, track_assembly

logger = get_logger(__name__, mode="sequential")

VARIABLE_KINDS = ("var", "let", "const")


# Field readers --------------------------------------------------------------

def _field(view: TreeView, kind: str, name: str) -> TreeView:
    value = view.get(name)
    if value is None:
        raise MalformedNode(kind, name, "missing")
    return value


def _string(view: TreeView, kind: str, name: str) -> str:
    try:
        return _field(view, kind, name).as_str()
    except TreeViewError as e:
        raise MalformedNode(kind, name, str(e)) from e


def _boolean(view: TreeView, kind: str, name: str) -> bool:
    try:
        return _field(view, kind, name).as_bool()
    except TreeViewError as e:
        raise MalformedNode(kind, name, str(e)) from e


def read_position(view: TreeView, kind: str) -> Position:
    """
    Read the ``start``/``end`` offsets of a node.

    Raises:
        MalformedNode: If an offset is missing, not an int, negative, or
            start is past end
    """
    offsets = {}
    for name in ("start", "end"):
        try:
            offsets[name] = _field(view, kind, name).as_int()
        except TreeViewError as e:
            raise MalformedNode(kind, name, str(e)) from e
    try:
        return Position(**offsets)
    except ValidationError as e:
        raise MalformedNode(kind, "position", str(e)) from e


def _expect_kind(view: TreeView, *models: Type[BaseNode]) -> None:
    tag = view.kind
    if tag is None:
        raise MalformedNode("<unknown>", "type", "missing node tag")
    if tag not in BUILDERS:
        raise UnknownNodeKind(tag)
    allowed = [model.__name__ for model in models]
    if tag not in allowed:
        raise UnexpectedKind(" or ".join(allowed), tag)


def _child(view: TreeView, kind: str, name: str) -> AnyNode:
    return parse_node(_field(view, kind, name))


def _optional_child(view: TreeView, name: str) -> Optional[AnyNode]:
    value = view.get(name)
    if value is None:
        return None
    return parse_node(value)


def _identifier(view: TreeView, kind: str, name: str) -> Identifier:
    value = _field(view, kind, name)
    _expect_kind(value, Identifier)
    return _build_identifier(value)


def _sequence(
    view: TreeView,
    kind: str,
    name: str,
    *models: Type[BaseNode],
    required: bool = True,
) -> Tuple[AnyNode, ...]:
    """
    Assemble an array field element by element until the first absent index.

    Args:
        view: Node holding the array
        kind: Tag of that node, for error reporting
        name: Array field name
        *models: Variants the elements must be, if restricted
        required: Whether a missing field is an error (else empty)
    """
    items = view.get(name)
    if items is None:
        if required:
            raise MalformedNode(kind, name, "missing")
        return ()
    if not isinstance(items.data, list):
        raise MalformedNode(kind, name, "expected array")

    nodes: List[AnyNode] = []
    for index in count():
        item = items.index(index)
        if item is None:
            break
        if models:
            _expect_kind(item, *models)
        nodes.append(parse_node(item))
    return tuple(nodes)


def _literal_text(view: TreeView) -> str:
    # String literals keep their cooked value; everything else its source text
    value = view.get("value")
    if value is not None and isinstance(value.data, str):
        return value.data
    raw = view.get("raw")
    if raw is not None and isinstance(raw.data, str):
        return raw.data
    if value is None:
        raise MalformedNode("Literal", "value", "missing")
    return json.dumps(value.data)


# Node builders ---------------------------------------------------------------

def _build_program(p: TreeView) -> Program:
    return Program(
        position=read_position(p, "Program"),
        body=_sequence(p, "Program", "body"),
    )


def _build_identifier(i: TreeView) -> Identifier:
    return Identifier(
        position=read_position(i, "Identifier"),
        name=_string(i, "Identifier", "name"),
    )


def _build_literal(n: TreeView) -> Literal:
    raw = n.get("raw")
    return Literal(
        position=read_position(n, "Literal"),
        value=_literal_text(n),
        raw=raw.data if raw is not None and isinstance(raw.data, str) else None,
    )


def _build_binary_expression(b: TreeView) -> BinaryExpression:
    return BinaryExpression(
        position=read_position(b, "BinaryExpression"),
        left=_child(b, "BinaryExpression", "left"),
        operator=_string(b, "BinaryExpression", "operator"),
        right=_child(b, "BinaryExpression", "right"),
    )


def _build_update_expression(u: TreeView) -> UpdateExpression:
    return UpdateExpression(
        position=read_position(u, "UpdateExpression"),
        operator=_string(u, "UpdateExpression", "operator"),
        prefix=_boolean(u, "UpdateExpression", "prefix"),
        argument=_child(u, "UpdateExpression", "argument"),
    )


def _build_expression_statement(e: TreeView) -> ExpressionStatement:
    return ExpressionStatement(
        position=read_position(e, "ExpressionStatement"),
        expression=_child(e, "ExpressionStatement", "expression"),
    )


def _build_block_statement(b: TreeView) -> BlockStatement:
    return BlockStatement(
        position=read_position(b, "BlockStatement"),
        body=_sequence(b, "BlockStatement", "body"),
    )


def _build_return_statement(r: TreeView) -> ReturnStatement:
    return ReturnStatement(
        position=read_position(r, "ReturnStatement"),
        argument=_optional_child(r, "argument"),
    )


def _build_for_statement(f: TreeView) -> ForStatement:
    return ForStatement(
        position=read_position(f, "ForStatement"),
        init=_optional_child(f, "init"),
        test=_optional_child(f, "test"),
        update=_optional_child(f, "update"),
        body=_optional_child(f, "body"),
    )


def _build_variable_declarator(d: TreeView) -> VariableDeclarator:
    return VariableDeclarator(
        position=read_position(d, "VariableDeclarator"),
        id=_child(d, "VariableDeclarator", "id"),
        init=_optional_child(d, "init"),
    )


def _build_variable_declaration(d: TreeView) -> VariableDeclaration:
    kind = _string(d, "VariableDeclaration", "kind")
    if kind not in VARIABLE_KINDS:
        raise MalformedNode("VariableDeclaration", "kind", f"unsupported kind {kind!r}")

    return VariableDeclaration(
        position=read_position(d, "VariableDeclaration"),
        kind=kind,
        declarations=_sequence(d, "VariableDeclaration", "declarations", VariableDeclarator),
    )


def _build_function_declaration(f: TreeView) -> FunctionDeclaration:
    generator = _boolean(f, "FunctionDeclaration", "generator")
    expression = _boolean(f, "FunctionDeclaration", "expression")

    # `export default function () {}` has no id
    fn_id = f.get("id")
    if fn_id is not None:
        _expect_kind(fn_id, Identifier)

    body = _field(f, "FunctionDeclaration", "body")
    _expect_kind(body, BlockStatement)

    return FunctionDeclaration(
        position=read_position(f, "FunctionDeclaration"),
        id=_build_identifier(fn_id) if fn_id is not None else None,
        generator=generator,
        expression=expression,
        params=_sequence(f, "FunctionDeclaration", "params", required=False),
        body=_build_block_statement(body),
    )


def _build_import_specifier(s: TreeView) -> ImportSpecifier:
    return ImportSpecifier(
        position=read_position(s, "ImportSpecifier"),
        imported=_identifier(s, "ImportSpecifier", "imported"),
        local=_identifier(s, "ImportSpecifier", "local"),
    )


def _build_import_default_specifier(s: TreeView) -> ImportDefaultSpecifier:
    return ImportDefaultSpecifier(
        position=read_position(s, "ImportDefaultSpecifier"),
        local=_identifier(s, "ImportDefaultSpecifier", "local"),
    )


def _build_import_declaration(i: TreeView) -> ImportDeclaration:
    source = _field(i, "ImportDeclaration", "source")
    _expect_kind(source, Literal)

    return ImportDeclaration(
        position=read_position(i, "ImportDeclaration"),
        specifiers=_sequence(
            i, "ImportDeclaration", "specifiers", ImportSpecifier, ImportDefaultSpecifier
        ),
        source=_build_literal(source),
    )


def _build_export_specifier(s: TreeView) -> ExportSpecifier:
    return ExportSpecifier(
        position=read_position(s, "ExportSpecifier"),
        exported=_identifier(s, "ExportSpecifier", "exported"),
        local=_identifier(s, "ExportSpecifier", "local"),
    )


def _build_export_named_declaration(e: TreeView) -> ExportNamedDeclaration:
    source = e.get("source")
    if source is not None:
        _expect_kind(source, Literal)

    return ExportNamedDeclaration(
        position=read_position(e, "ExportNamedDeclaration"),
        specifiers=_sequence(
            e, "ExportNamedDeclaration", "specifiers", ExportSpecifier, required=False
        ),
        declaration=_optional_child(e, "declaration"),
        source=_build_literal(source) if source is not None else None,
    )


def _build_export_default_declaration(e: TreeView) -> ExportDefaultDeclaration:
    return ExportDefaultDeclaration(
        position=read_position(e, "ExportDefaultDeclaration"),
        declaration=_child(e, "ExportDefaultDeclaration", "declaration"),
    )


# Tag -> builder; keys must match jstree.models.node.NODE_TYPES
BUILDERS: Dict[str, Callable[[TreeView], AnyNode]] = {
    "Program": _build_program,
    "Identifier": _build_identifier,
    "Literal": _build_literal,
    "BinaryExpression": _build_binary_expression,
    "UpdateExpression": _build_update_expression,
    "ExpressionStatement": _build_expression_statement,
    "BlockStatement": _build_block_statement,
    "ReturnStatement": _build_return_statement,
    "ForStatement": _build_for_statement,
    "VariableDeclarator": _build_variable_declarator,
    "VariableDeclaration": _build_variable_declaration,
    "FunctionDeclaration": _build_function_declaration,
    "ImportSpecifier": _build_import_specifier,
    "ImportDefaultSpecifier": _build_import_default_specifier,
    "ImportDeclaration": _build_import_declaration,
    "ExportSpecifier": _build_export_specifier,
    "ExportNamedDeclaration": _build_export_named_declaration,
    "ExportDefaultDeclaration": _build_export_default_declaration,
}


# Public API -------------------------------------------------------------------

def parse_node(view: TreeView) -> AnyNode:
    """
    Build the typed node for one ESTree object, recursing into its children.

    Args:
        view: View over an object carrying a ``type`` tag

    Returns:
        The matching node model

    Raises:
        UnknownNodeKind: If the tag is not a supported variant
        UnexpectedKind: If a child has a variant its slot does not allow
        MalformedNode: If a required field is missing or has the wrong shape
    """
    tag = view.kind
    if tag is None:
        raise MalformedNode("<unknown>", "type", "missing node tag")

    builder = BUILDERS.get(tag)
    if builder is None:
        raise UnknownNodeKind(tag)
    return builder(view)


def check_program_kind(view: TreeView) -> None:
    """Raise UnexpectedKind unless the view is tagged ``Program``."""
    if view.kind != "Program":
        raise UnexpectedKind("Program", view.kind)


def count_nodes(program: Program, metrics: AssemblyMetrics) -> None:
    """Record every node of ``program`` in an AssemblyMetrics collector."""
    for node in walk(program):
        metrics.record_node(node.type)


def parse_program(view: TreeView, source: Optional[str] = None) -> Program:
    """
    Assemble a whole Program sequentially.

    The first error anywhere in the tree aborts assembly; no partial
    Program is returned.

    Args:
        view: View over the Acorn output root
        source: Source file name, used only for logging and metrics

    Returns:
        The typed Program

    Raises:
        UnexpectedKind: If the root is not a Program
        NestingTooDeep: If the tree nests past the recursion limit
        ParseError: On any error in the tree
    """
    check_program_kind(view)
    log_assembly_phase(logger, "sequential", "assemble", "started", source_file=source)

    with track_assembly("sequential", source) as metrics:
        try:
            program = _build_program(view)
        except RecursionError:
            raise NestingTooDeep("Program") from None
        metrics.record_statements(len(program.body))
        count_nodes(program, metrics)

    log_assembly_phase(logger, "sequential", "assemble", "completed", source_file=source)
    return program
