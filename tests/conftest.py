"""
Shared ESTree fixtures.

Every fixture builds a fresh document shaped like Acorn's ``--ecma6
--module`` output, so no test sees another test's tree.
"""

import sys

import pytest


def estree(type_, start, end, **fields):
    """Build one ESTree node dict."""
    return {"type": type_, "start": start, "end": end, **fields}


def ident(name, start):
    return estree("Identifier", start, start + len(name), name=name)


def number(value, start):
    raw = str(value)
    return estree("Literal", start, start + len(raw), value=value, raw=raw)


@pytest.fixture
def make_node():
    """Factory for ESTree node dicts."""
    return estree


@pytest.fixture
def three_statement_tree():
    """
    var x = 1;
    const y = 2;
    function f(){ return x + y; }
    """
    return estree("Program", 0, 54, sourceType="module", body=[
        estree("VariableDeclaration", 0, 10, kind="var", declarations=[
            estree("VariableDeclarator", 4, 9, id=ident("x", 4), init=number(1, 8)),
        ]),
        estree("VariableDeclaration", 11, 23, kind="const", declarations=[
            estree("VariableDeclarator", 17, 22, id=ident("y", 17), init=number(2, 21)),
        ]),
        estree(
            "FunctionDeclaration", 24, 53,
            id=ident("f", 33),
            generator=False,
            expression=False,
            params=[],
            body=estree("BlockStatement", 36, 53, body=[
                estree(
                    "ReturnStatement", 38, 51,
                    argument=estree(
                        "BinaryExpression", 45, 50,
                        left=ident("x", 45),
                        operator="+",
                        right=ident("y", 49),
                    ),
                ),
            ]),
        ),
    ])


@pytest.fixture
def import_tree():
    """import {a as b} from "m";"""
    return estree("Program", 0, 25, sourceType="module", body=[
        estree(
            "ImportDeclaration", 0, 25,
            specifiers=[
                estree("ImportSpecifier", 8, 14, imported=ident("a", 8), local=ident("b", 13)),
            ],
            source=estree("Literal", 21, 24, value="m", raw='"m"'),
        ),
    ])


@pytest.fixture
def module_tree():
    """
    import d, {a} from "m";
    for (let i = 0; i < n; i++) { a; }
    export {a as b};
    export default function () {}
    """
    return estree("Program", 0, 114, sourceType="module", body=[
        estree(
            "ImportDeclaration", 0, 23,
            specifiers=[
                estree("ImportDefaultSpecifier", 7, 8, local=ident("d", 7)),
                estree("ImportSpecifier", 11, 12, imported=ident("a", 11), local=ident("a", 11)),
            ],
            source=estree("Literal", 19, 22, value="m", raw='"m"'),
        ),
        estree(
            "ForStatement", 24, 58,
            init=estree("VariableDeclaration", 29, 38, kind="let", declarations=[
                estree("VariableDeclarator", 33, 38, id=ident("i", 33), init=number(0, 37)),
            ]),
            test=estree("BinaryExpression", 40, 45, left=ident("i", 40), operator="<", right=ident("n", 44)),
            update=estree("UpdateExpression", 47, 50, operator="++", prefix=False, argument=ident("i", 47)),
            body=estree("BlockStatement", 52, 58, body=[
                estree("ExpressionStatement", 54, 56, expression=ident("a", 54)),
            ]),
        ),
        estree(
            "ExportNamedDeclaration", 59, 75,
            declaration=None,
            specifiers=[
                estree("ExportSpecifier", 67, 73, local=ident("a", 67), exported=ident("b", 72)),
            ],
            source=None,
        ),
        estree(
            "ExportDefaultDeclaration", 76, 113,
            declaration=estree(
                "FunctionDeclaration", 91, 113,
                id=None,
                generator=False,
                expression=False,
                params=[],
                body=estree("BlockStatement", 111, 113, body=[]),
            ),
        ),
    ])


@pytest.fixture
def wide_tree():
    """Program with many top-level `var vN = N;` statements."""
    body = []
    offset = 0
    for n in range(64):
        name = f"v{n}"
        text = f"var {name} = {n};"
        decl_start = offset + 4
        init_start = decl_start + len(name) + 3
        body.append(estree("VariableDeclaration", offset, offset + len(text), kind="var", declarations=[
            estree(
                "VariableDeclarator", decl_start, init_start + len(str(n)),
                id=ident(name, decl_start),
                init=number(n, init_start),
            ),
        ]))
        offset += len(text) + 1
    return estree("Program", 0, offset, sourceType="module", body=body)


@pytest.fixture
def deep_chain_tree():
    """`a0 + a1 + ... ;` nested past the interpreter's recursion limit."""
    depth = sys.getrecursionlimit() + 100
    expr = ident("a0", 0)
    for n in range(1, depth):
        expr = estree("BinaryExpression", 0, n + 1, left=expr, operator="+", right=ident(f"a{n}", n))
    return estree("Program", 0, depth + 1, sourceType="module", body=[
        estree("ExpressionStatement", 0, depth + 1, expression=expr),
    ])


@pytest.fixture
def null_statement_tree():
    """Program whose body has a null between two statements."""
    return estree("Program", 0, 5, sourceType="module", body=[
        estree("ExpressionStatement", 0, 2, expression=ident("a", 0)),
        None,
        estree("ExpressionStatement", 3, 5, expression=ident("b", 3)),
    ])
