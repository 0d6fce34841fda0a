"""
Typed JavaScript AST node models.

Each variant is a frozen pydantic model tagged by a ``type`` literal equal to
the ESTree node name, so the full set forms a closed discriminated union
(``AnyNode``). Sequences are tuples and keep document order.
"""

import typing
from typing import Annotated, Dict, Iterator, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Position(BaseModel):
    """Source offset range covered by a node."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=0, description="Offset of the first character")
    end: int = Field(..., ge=0, description="Offset one past the last character")

    @model_validator(mode="after")
    def _check_order(self) -> "Position":
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) must not exceed end ({self.end})")
        return self


class BaseNode(BaseModel):
    """Fields shared by every AST node."""

    model_config = ConfigDict(frozen=True)

    position: Position


class Program(BaseNode):
    type: typing.Literal["Program"] = "Program"
    body: Tuple["AnyNode", ...] = ()


class Identifier(BaseNode):
    type: typing.Literal["Identifier"] = "Identifier"
    name: str


class Literal(BaseNode):
    """Literal value kept as source text; ``raw`` is Acorn's raw slice when known."""

    type: typing.Literal["Literal"] = "Literal"
    value: str
    raw: Optional[str] = None


class BinaryExpression(BaseNode):
    type: typing.Literal["BinaryExpression"] = "BinaryExpression"
    left: "AnyNode"
    operator: str
    right: "AnyNode"


class UpdateExpression(BaseNode):
    type: typing.Literal["UpdateExpression"] = "UpdateExpression"
    operator: str
    prefix: bool
    argument: "AnyNode"


class ExpressionStatement(BaseNode):
    type: typing.Literal["ExpressionStatement"] = "ExpressionStatement"
    expression: "AnyNode"


class BlockStatement(BaseNode):
    type: typing.Literal["BlockStatement"] = "BlockStatement"
    body: Tuple["AnyNode", ...] = ()


class ReturnStatement(BaseNode):
    type: typing.Literal["ReturnStatement"] = "ReturnStatement"
    argument: Optional["AnyNode"] = None


class ForStatement(BaseNode):
    """``for (init; test; update) body``; every clause may be absent."""

    type: typing.Literal["ForStatement"] = "ForStatement"
    init: Optional["AnyNode"] = None
    test: Optional["AnyNode"] = None
    update: Optional["AnyNode"] = None
    body: Optional["AnyNode"] = None


class VariableDeclarator(BaseNode):
    type: typing.Literal["VariableDeclarator"] = "VariableDeclarator"
    id: "AnyNode"
    init: Optional["AnyNode"] = None


class VariableDeclaration(BaseNode):
    type: typing.Literal["VariableDeclaration"] = "VariableDeclaration"
    kind: typing.Literal["var", "let", "const"]
    declarations: Tuple[VariableDeclarator, ...] = ()


class FunctionDeclaration(BaseNode):
    type: typing.Literal["FunctionDeclaration"] = "FunctionDeclaration"
    id: Optional[Identifier] = None
    generator: bool = False
    expression: bool = False
    params: Tuple["AnyNode", ...] = ()
    body: BlockStatement


class ImportSpecifier(BaseNode):
    type: typing.Literal["ImportSpecifier"] = "ImportSpecifier"
    imported: Identifier
    local: Identifier


class ImportDefaultSpecifier(BaseNode):
    type: typing.Literal["ImportDefaultSpecifier"] = "ImportDefaultSpecifier"
    local: Identifier


class ImportDeclaration(BaseNode):
    type: typing.Literal["ImportDeclaration"] = "ImportDeclaration"
    specifiers: Tuple["AnyImportSpecifier", ...] = ()
    source: Literal


class ExportSpecifier(BaseNode):
    type: typing.Literal["ExportSpecifier"] = "ExportSpecifier"
    exported: Identifier
    local: Identifier


class ExportNamedDeclaration(BaseNode):
    """``export { a as b }``, ``export { a } from "m"`` or ``export const a = 1``."""

    type: typing.Literal["ExportNamedDeclaration"] = "ExportNamedDeclaration"
    specifiers: Tuple[ExportSpecifier, ...] = ()
    declaration: Optional["AnyNode"] = None
    source: Optional[Literal] = None


class ExportDefaultDeclaration(BaseNode):
    type: typing.Literal["ExportDefaultDeclaration"] = "ExportDefaultDeclaration"
    declaration: "AnyNode"


_VARIANTS = (
    Program,
    Identifier,
    Literal,
    BinaryExpression,
    UpdateExpression,
    ExpressionStatement,
    BlockStatement,
    ReturnStatement,
    ForStatement,
    VariableDeclarator,
    VariableDeclaration,
    FunctionDeclaration,
    ImportSpecifier,
    ImportDefaultSpecifier,
    ImportDeclaration,
    ExportSpecifier,
    ExportNamedDeclaration,
    ExportDefaultDeclaration,
)

AnyNode = Annotated[Union[_VARIANTS], Field(discriminator="type")]

AnyImportSpecifier = Annotated[
    Union[ImportSpecifier, ImportDefaultSpecifier],
    Field(discriminator="type"),
]

# Tag -> model class; every tag equals its class name
NODE_TYPES: Dict[str, Type[BaseNode]] = {model.__name__: model for model in _VARIANTS}

# Resolve the forward references to the unions above
for _model in _VARIANTS:
    _model.model_rebuild()


def iter_children(node: BaseNode) -> Iterator[BaseNode]:
    """Yield the direct child nodes of ``node`` in field order."""
    for name in type(node).model_fields:
        value = getattr(node, name)
        if isinstance(value, BaseNode):
            yield value
        elif isinstance(value, tuple):
            for item in value:
                if isinstance(item, BaseNode):
                    yield item


def walk(node: BaseNode) -> Iterator[BaseNode]:
    """Yield ``node`` and all of its descendants, depth first, in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_children(current))))
