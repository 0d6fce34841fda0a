"""
Unit tests for the typed node models.
"""

import pytest
from pydantic import ValidationError

from jstree.models import (
    NODE_TYPES,
    BinaryExpression,
    Identifier,
    Literal,
    Position,
    Program,
    ReturnStatement,
    iter_children,
    walk,
)
from jstree.services.assembler import BUILDERS


def pos(start, end):
    return Position(start=start, end=end)


def test_position_rejects_negative_offsets():
    """Test offsets must be non-negative."""
    with pytest.raises(ValidationError):
        Position(start=-1, end=3)


def test_position_rejects_start_after_end():
    """Test start must not exceed end."""
    with pytest.raises(ValidationError):
        Position(start=5, end=2)


def test_nodes_are_frozen():
    """Test nodes cannot be modified once built."""
    node = Identifier(position=pos(0, 1), name="x")

    with pytest.raises(ValidationError):
        node.name = "y"


def test_sequences_are_tuples():
    """Test sequence fields are immutable tuples."""
    program = Program(position=pos(0, 1), body=[Identifier(position=pos(0, 1), name="x")])

    assert isinstance(program.body, tuple)


def test_structural_equality():
    """Test nodes compare by variant and field values."""
    a = Identifier(position=pos(0, 1), name="x")
    b = Identifier(position=pos(0, 1), name="x")
    c = Identifier(position=pos(0, 1), name="z")

    assert a == b
    assert a != c


def test_tagged_union_validates_from_dict():
    """Test the discriminated union picks the variant from the type tag."""
    ret = ReturnStatement.model_validate({
        "position": {"start": 0, "end": 9},
        "argument": {
            "type": "BinaryExpression",
            "position": {"start": 7, "end": 8},
            "left": {"type": "Identifier", "position": {"start": 7, "end": 8}, "name": "a"},
            "operator": "+",
            "right": {"type": "Literal", "position": {"start": 7, "end": 8}, "value": "1"},
        },
    })

    assert isinstance(ret.argument, BinaryExpression)
    assert isinstance(ret.argument.right, Literal)


def test_every_variant_has_a_builder():
    """Test the assembler dispatch covers exactly the node variants."""
    assert set(BUILDERS) == set(NODE_TYPES)
    assert len(NODE_TYPES) == 18


def test_walk_is_depth_first_in_document_order():
    """Test walk yields parents before children, left before right."""
    left = Identifier(position=pos(0, 1), name="a")
    right = Identifier(position=pos(4, 5), name="b")
    expr = BinaryExpression(position=pos(0, 5), left=left, operator="+", right=right)
    ret = ReturnStatement(position=pos(0, 6), argument=expr)

    assert list(iter_children(ret)) == [expr]
    assert [n.type for n in walk(ret)] == [
        "ReturnStatement", "BinaryExpression", "Identifier", "Identifier"
    ]
    assert list(walk(ret))[2:] == [left, right]


def test_walk_handles_deep_trees():
    """Test walk does not recurse once per level."""
    depth = 5000
    expr = Identifier(position=pos(0, 1), name="a0")
    for n in range(1, depth):
        expr = BinaryExpression(
            position=pos(0, n + 1), left=expr, operator="+", right=Identifier(position=pos(n, n + 1), name=f"a{n}")
        )

    nodes = list(walk(expr))

    assert len(nodes) == 2 * depth - 1
    assert nodes[0] is expr
    assert nodes[-1].name == f"a{depth - 1}"
