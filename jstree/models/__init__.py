"""Data models for the jstree AST."""

from .error import (
    AcornError,
    AssemblyTimeout,
    MalformedNode,
    NestingTooDeep,
    ParseError,
    UnexpectedKind,
    UnknownNodeKind,
)
from .node import (
    NODE_TYPES,
    iter_children,
    walk,
    AnyImportSpecifier,
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
)

__all__ = [
    # Node models
    "Position",
    "BaseNode",
    "AnyNode",
    "AnyImportSpecifier",
    "NODE_TYPES",
    "iter_children",
    "walk",
    "Program",
    "Identifier",
    "Literal",
    "BinaryExpression",
    "UpdateExpression",
    "ExpressionStatement",
    "BlockStatement",
    "ReturnStatement",
    "ForStatement",
    "VariableDeclarator",
    "VariableDeclaration",
    "FunctionDeclaration",
    "ImportSpecifier",
    "ImportDefaultSpecifier",
    "ImportDeclaration",
    "ExportSpecifier",
    "ExportNamedDeclaration",
    "ExportDefaultDeclaration",
    # Error models
    "ParseError",
    "UnknownNodeKind",
    "UnexpectedKind",
    "MalformedNode",
    "NestingTooDeep",
    "AssemblyTimeout",
    "AcornError",
]
