import json

import pytest

from letter.letter_ast import (
    BinaryExpression,
    BlockStatement,
    CallExpression,
    EmptyStatement,
    ExpressionStatement,
    Identifier,
    IfStatement,
    MemberExpression,
    NullLiteral,
    NumericLiteral,
    Program,
    StringLiteral,
    VariableDeclaration,
    VariableStatement,
    node_from_dict,
    node_types,
)
from letter.letter_parser import parse


def test_node_equality_is_structural() -> None:
    n1 = BinaryExpression("+", NumericLiteral(1), Identifier("x"))
    n2 = BinaryExpression("+", NumericLiteral(1), Identifier("x"))
    assert n1 == n2


def test_node_equality_compares_children() -> None:
    n1 = BinaryExpression("+", NumericLiteral(1), Identifier("x"))
    n2 = BinaryExpression("+", NumericLiteral(1), Identifier("y"))
    assert n1 != n2


def test_node_equality_compares_kind() -> None:
    assert EmptyStatement() != NullLiteral()
    assert StringLiteral("1") != NumericLiteral(1)  # type: ignore[comparison-overlap]


def test_type_tag_is_not_a_field() -> None:
    assert Identifier("x").type == "Identifier"
    assert Identifier.type == "Identifier"
    assert "type" not in Identifier("x").__dict__


def test_to_dict_puts_type_first() -> None:
    d = MemberExpression(True, Identifier("a"), NumericLiteral(0)).to_dict()
    assert list(d) == ["type", "computed", "object", "property"]
    assert d["object"] == {"type": "Identifier", "name": "a"}


def test_to_dict_of_fieldless_node() -> None:
    assert EmptyStatement().to_dict() == {"type": "EmptyStatement"}


def test_to_dict_serializes_lists() -> None:
    node = CallExpression(Identifier("f"), [NumericLiteral(1), StringLiteral("s")])
    assert node.to_dict()["arguments"] == [
        {"type": "NumericLiteral", "value": 1},
        {"type": "StringLiteral", "value": "s"},
    ]


def test_to_dict_keeps_null_fields() -> None:
    d = VariableDeclaration(Identifier("x")).to_dict()
    assert d == {"type": "VariableDeclaration", "id": {"type": "Identifier", "name": "x"}, "init": None}


def test_from_dict_rebuilds_parsed_program() -> None:
    program = parse("let a = 1; if (a) { f(a.b, 'x'); } else ;")
    data = json.loads(json.dumps(program.to_dict()))
    assert node_from_dict(data) == program


def test_from_dict_nested_statements() -> None:
    data = {
        "type": "Program",
        "body": [
            {
                "type": "IfStatement",
                "test": {"type": "Identifier", "name": "x"},
                "consequent": {"type": "BlockStatement", "body": []},
                "alternate": None,
            }
        ],
    }
    assert node_from_dict(data) == Program(
        [IfStatement(Identifier("x"), BlockStatement([]), None)]
    )


@pytest.mark.parametrize("data", [{"type": "Bogus"}, {"name": "x"}, {"type": 3}])  # type: ignore[misc]
def test_from_dict_rejects_unknown_type(data: dict[str, object]) -> None:
    with pytest.raises(ValueError, match="Unknown AST node type"):
        node_from_dict(data)


def test_node_types_cover_every_kind() -> None:
    assert set(node_types) == {
        "Program",
        "BlockStatement",
        "EmptyStatement",
        "ExpressionStatement",
        "VariableStatement",
        "VariableDeclaration",
        "IfStatement",
        "AssignmentExpression",
        "LogicalExpression",
        "BinaryExpression",
        "UnaryExpression",
        "MemberExpression",
        "CallExpression",
        "Super",
        "Identifier",
        "NumericLiteral",
        "StringLiteral",
        "BooleanLiteral",
        "NullLiteral",
    }


def test_default_lists_are_not_shared() -> None:
    a = VariableStatement()
    b = VariableStatement()
    a.declarations.append(VariableDeclaration(Identifier("x")))
    assert b.declarations == []
    assert ExpressionStatement(Identifier("x")) == ExpressionStatement(Identifier("x"))
