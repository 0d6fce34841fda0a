"""
Structural printer for typed AST trees.

Writes one line per node, indented two spaces per level, to any text sink.
Printing is diagnostic only: values it cannot classify produce a fallback
line and never an exception.
"""

import io
import sys
from typing import Any, Callable, Dict, Optional, TextIO, Type

from jstree.models.node import (
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
    Program,
    ReturnStatement,
    UpdateExpression,
    VariableDeclaration,
    VariableDeclarator,
)

INDENT = "  "


class TreePrinter:
    """Indented dump of a node subtree to a text sink."""

    def __init__(self, sink: Optional[TextIO] = None):
        """
        Initialize the printer.

        Args:
            sink: Text stream to write to (defaults to sys.stdout at print time)
        """
        self._sink = sink
        self._handlers: Dict[Type[BaseNode], Callable[[Any, int], None]] = {
            Program: self._print_program,
            Identifier: self._print_identifier,
            Literal: self._print_literal,
            BinaryExpression: self._print_binary_expression,
            UpdateExpression: self._print_update_expression,
            ExpressionStatement: self._print_expression_statement,
            BlockStatement: self._print_block_statement,
            ReturnStatement: self._print_return_statement,
            ForStatement: self._print_for_statement,
            VariableDeclarator: self._print_variable_declarator,
            VariableDeclaration: self._print_variable_declaration,
            FunctionDeclaration: self._print_function_declaration,
            ImportSpecifier: self._print_import_specifier,
            ImportDefaultSpecifier: self._print_import_default_specifier,
            ImportDeclaration: self._print_import_declaration,
            ExportSpecifier: self._print_export_specifier,
            ExportNamedDeclaration: self._print_export_named_declaration,
            ExportDefaultDeclaration: self._print_export_default_declaration,
        }

    @property
    def handled_types(self) -> frozenset:
        return frozenset(self._handlers)

    def print(self, node: Any, indent: int = 0) -> None:
        """
        Print ``node`` and its subtree starting at ``indent`` levels.

        Args:
            node: Any node model; other values print a fallback line
            indent: Non-negative starting depth
        """
        handler = self._handlers.get(type(node))
        if handler is None:
            self._line(indent, f"Unknown node: {type(node).__name__}")
            return
        try:
            handler(node, max(indent, 0))
        except (AttributeError, TypeError) as e:
            # Hand-built models (e.g. model_construct) may lack fields
            self._line(indent, f"Unprintable {type(node).__name__}: {e}")
        except RecursionError:
            # Caught by the innermost print with stack left to write the line
            self._line(indent, f"Unprintable {type(node).__name__}: nesting too deep")

    def _line(self, indent: int, text: str) -> None:
        sink = self._sink if self._sink is not None else sys.stdout
        sink.write(f"{INDENT * indent}{text}\n")

    def _children(self, nodes, indent: int) -> None:
        for child in nodes:
            self.print(child, indent)

    def _optional(self, node, indent: int) -> None:
        if node is not None:
            self.print(node, indent)

    def _print_program(self, p: Program, indent: int) -> None:
        self._line(indent, "Program")
        self._children(p.body, indent + 1)

    def _print_identifier(self, i: Identifier, indent: int) -> None:
        self._line(indent, f"Identifier '{i.name}'")

    def _print_literal(self, n: Literal, indent: int) -> None:
        self._line(indent, f"Literal '{n.value}'")

    def _print_binary_expression(self, b: BinaryExpression, indent: int) -> None:
        self._line(indent, f"BinaryExpression '{b.operator}'")
        self.print(b.left, indent + 1)
        self.print(b.right, indent + 1)

    def _print_update_expression(self, u: UpdateExpression, indent: int) -> None:
        fix = "prefix" if u.prefix else "postfix"
        self._line(indent, f"UpdateExpression '{u.operator}' {fix}")
        self.print(u.argument, indent + 1)

    def _print_expression_statement(self, e: ExpressionStatement, indent: int) -> None:
        self._line(indent, "ExpressionStatement")
        self.print(e.expression, indent + 1)

    def _print_block_statement(self, b: BlockStatement, indent: int) -> None:
        self._line(indent, "BlockStatement")
        self._children(b.body, indent + 1)

    def _print_return_statement(self, r: ReturnStatement, indent: int) -> None:
        self._line(indent, "ReturnStatement")
        self._optional(r.argument, indent + 1)

    def _print_for_statement(self, f: ForStatement, indent: int) -> None:
        self._line(indent, "ForStatement")
        for clause in ("init", "test", "update", "body"):
            child = getattr(f, clause)
            if child is not None:
                self._line(indent + 1, f"{clause}:")
                self.print(child, indent + 2)

    def _print_variable_declarator(self, d: VariableDeclarator, indent: int) -> None:
        self._line(indent, "VariableDeclarator")
        self.print(d.id, indent + 1)
        self._optional(d.init, indent + 1)

    def _print_variable_declaration(self, d: VariableDeclaration, indent: int) -> None:
        self._line(indent, f"VariableDeclaration {d.kind}")
        self._children(d.declarations, indent + 1)

    def _print_function_declaration(self, f: FunctionDeclaration, indent: int) -> None:
        flags = [flag for flag in ("generator", "expression") if getattr(f, flag)]
        label = "FunctionDeclaration" + "".join(f" {flag}" for flag in flags)
        self._line(indent, label)
        self._optional(f.id, indent + 1)
        self._children(f.params, indent + 1)
        self.print(f.body, indent + 1)

    def _print_import_specifier(self, i: ImportSpecifier, indent: int) -> None:
        self._line(indent, f"ImportSpecifier local:{i.local.name} imported:{i.imported.name}")

    def _print_import_default_specifier(self, i: ImportDefaultSpecifier, indent: int) -> None:
        self._line(indent, "ImportDefaultSpecifier")
        self.print(i.local, indent + 1)

    def _print_import_declaration(self, i: ImportDeclaration, indent: int) -> None:
        self._line(indent, f"ImportDeclaration '{i.source.value}'")
        self._children(i.specifiers, indent + 1)

    def _print_export_specifier(self, e: ExportSpecifier, indent: int) -> None:
        self._line(indent, f"ExportSpecifier local:{e.local.name} exported:{e.exported.name}")

    def _print_export_named_declaration(self, e: ExportNamedDeclaration, indent: int) -> None:
        label = "ExportNamedDeclaration"
        if e.source is not None:
            label += f" from '{e.source.value}'"
        self._line(indent, label)
        self._children(e.specifiers, indent + 1)
        self._optional(e.declaration, indent + 1)

    def _print_export_default_declaration(self, e: ExportDefaultDeclaration, indent: int) -> None:
        self._line(indent, "ExportDefaultDeclaration")
        self.print(e.declaration, indent + 1)


def print_tree(node: Any, indent: int = 0, sink: Optional[TextIO] = None) -> None:
    """Print ``node`` to ``sink`` (stdout by default)."""
    TreePrinter(sink).print(node, indent)


def format_tree(node: Any, indent: int = 0) -> str:
    """Return the printed form of ``node`` as a string."""
    buffer = io.StringIO()
    TreePrinter(buffer).print(node, indent)
    return buffer.getvalue()
