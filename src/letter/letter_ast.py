"""
Defines the abstract syntax tree (AST) node types for the Letter programming language.

Every node kind is its own dataclass carrying only the fields its shape needs,
and a class-level `type` tag naming the kind. Together the node classes form a
closed sum type: `Statement` and `Expression` are unions of the concrete
classes, and the parser never builds anything outside of them.

Classes:
    ASTNode:
        Base class providing structural equality and `to_dict()` serialization.

    Program, BlockStatement, EmptyStatement, ExpressionStatement,
    VariableStatement, VariableDeclaration, IfStatement:
        Statement-level nodes.

    AssignmentExpression, LogicalExpression, BinaryExpression, UnaryExpression,
    MemberExpression, CallExpression, Super, Identifier, NumericLiteral,
    StringLiteral, BooleanLiteral, NullLiteral:
        Expression-level nodes.

The dictionary form (`to_dict()` / `node_from_dict()`) is the stable
interchange contract with downstream consumers: a `type` key holding the tag,
followed by the node's fields in declaration order.

Example:
    >>> BinaryExpression("+", NumericLiteral(2), NumericLiteral(3)).to_dict()
    {'type': 'BinaryExpression', 'operator': '+', 'left': {...}, 'right': {...}}
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Union


class ASTNode:
    """Base class for every Letter AST node.

    Subclasses are dataclasses; equality is structural and recursive, so two
    trees compare equal when they have the same shape and values.
    """

    type: ClassVar[str]

    def to_dict(self) -> dict[str, Any]:
        """Converts the node (and all descendants) into nested plain dicts."""
        result: dict[str, Any] = {"type": self.type}
        for f in fields(self):  # type: ignore[arg-type]
            result[f.name] = _value_to_dict(getattr(self, f.name))
        return result


def _value_to_dict(value: Any) -> Any:
    if isinstance(value, ASTNode):
        return value.to_dict()
    if isinstance(value, list):
        return [_value_to_dict(v) for v in value]
    return value


# Statements


@dataclass
class Program(ASTNode):
    type: ClassVar[str] = "Program"
    body: list["Statement"] = field(default_factory=list)


@dataclass
class BlockStatement(ASTNode):
    type: ClassVar[str] = "BlockStatement"
    body: list["Statement"] = field(default_factory=list)


@dataclass
class EmptyStatement(ASTNode):
    type: ClassVar[str] = "EmptyStatement"


@dataclass
class ExpressionStatement(ASTNode):
    type: ClassVar[str] = "ExpressionStatement"
    expression: "Expression"


@dataclass
class VariableDeclaration(ASTNode):
    type: ClassVar[str] = "VariableDeclaration"
    id: "Identifier"
    init: "Expression | None" = None


@dataclass
class VariableStatement(ASTNode):
    type: ClassVar[str] = "VariableStatement"
    declarations: list[VariableDeclaration] = field(default_factory=list)


@dataclass
class IfStatement(ASTNode):
    type: ClassVar[str] = "IfStatement"
    test: "Expression"
    consequent: "Statement"
    alternate: "Statement | None" = None


# Expressions


@dataclass
class AssignmentExpression(ASTNode):
    type: ClassVar[str] = "AssignmentExpression"
    operator: str
    left: "Identifier | MemberExpression"
    right: "Expression"


@dataclass
class LogicalExpression(ASTNode):
    type: ClassVar[str] = "LogicalExpression"
    operator: str
    left: "Expression"
    right: "Expression"


@dataclass
class BinaryExpression(ASTNode):
    type: ClassVar[str] = "BinaryExpression"
    operator: str
    left: "Expression"
    right: "Expression"


@dataclass
class UnaryExpression(ASTNode):
    type: ClassVar[str] = "UnaryExpression"
    operator: str
    argument: "Expression"


@dataclass
class MemberExpression(ASTNode):
    type: ClassVar[str] = "MemberExpression"
    computed: bool
    object: "Expression"
    property: "Expression"


@dataclass
class CallExpression(ASTNode):
    type: ClassVar[str] = "CallExpression"
    callee: "Expression | Super"
    arguments: list["Expression"] = field(default_factory=list)


@dataclass
class Super(ASTNode):
    type: ClassVar[str] = "Super"


@dataclass
class Identifier(ASTNode):
    type: ClassVar[str] = "Identifier"
    name: str


@dataclass
class NumericLiteral(ASTNode):
    type: ClassVar[str] = "NumericLiteral"
    value: int


@dataclass
class StringLiteral(ASTNode):
    type: ClassVar[str] = "StringLiteral"
    value: str


@dataclass
class BooleanLiteral(ASTNode):
    type: ClassVar[str] = "BooleanLiteral"
    value: bool


@dataclass
class NullLiteral(ASTNode):
    type: ClassVar[str] = "NullLiteral"


Statement = Union[
    BlockStatement,
    EmptyStatement,
    ExpressionStatement,
    VariableStatement,
    IfStatement,
]

Literal = Union[NumericLiteral, StringLiteral, BooleanLiteral, NullLiteral]

Expression = Union[
    AssignmentExpression,
    LogicalExpression,
    BinaryExpression,
    UnaryExpression,
    MemberExpression,
    CallExpression,
    Identifier,
    Literal,
]

node_types: dict[str, type[ASTNode]] = {
    cls.type: cls
    for cls in (
        Program,
        BlockStatement,
        EmptyStatement,
        ExpressionStatement,
        VariableStatement,
        VariableDeclaration,
        IfStatement,
        AssignmentExpression,
        LogicalExpression,
        BinaryExpression,
        UnaryExpression,
        MemberExpression,
        CallExpression,
        Super,
        Identifier,
        NumericLiteral,
        StringLiteral,
        BooleanLiteral,
        NullLiteral,
    )
}


def node_from_dict(data: dict[str, Any]) -> ASTNode:
    """Rebuilds a node tree from the dict form produced by `ASTNode.to_dict()`.

    Raises:
        ValueError: If a `type` tag is missing or names no known node kind.
    """
    tag = data.get("type")
    cls = node_types.get(tag) if isinstance(tag, str) else None
    if cls is None:
        raise ValueError(f"Unknown AST node type: {tag!r}")
    kwargs = {
        f.name: _value_from_dict(data[f.name])
        for f in fields(cls)  # type: ignore[arg-type]
        if f.name in data
    }
    return cls(**kwargs)


def _value_from_dict(value: Any) -> Any:
    if isinstance(value, dict):
        return node_from_dict(value)
    if isinstance(value, list):
        return [_value_from_dict(v) for v in value]
    return value
