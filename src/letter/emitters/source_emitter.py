"""
Translates Letter AST nodes back into Letter source code.

This module defines the `SourceEmitter` class, a pretty-printer that renders a
`Program` (or any statement or expression node) as normalized Letter source.
Parsing the emitted text yields a tree deep-equal to the one that was emitted,
so the emitter doubles as a formatter.

Supported Features:
    - Statements: empty, block, variable, if/else (including `else if` chains),
      expression statements
    - Expressions: assignment, logical, binary, unary, member access, calls,
      `super` calls, identifiers and every literal kind

Behavior:
    - One statement per line; block bodies are indented by four spaces.
    - Parentheses are inserted only where a child binds looser than its
      position in the parent requires.
    - Maintains a code buffer (`lines`) which can be retrieved with `get_output()`.

Raises:
    - `ValueError`: If a string literal holds both quote characters.
    - `NotImplementedError`: If a node kind has no corresponding emitter.
"""

import re

from letter.letter_ast import (
    ASTNode,
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    EmptyStatement,
    ExpressionStatement,
    Identifier,
    IfStatement,
    LogicalExpression,
    MemberExpression,
    NullLiteral,
    NumericLiteral,
    Program,
    StringLiteral,
    Super,
    UnaryExpression,
    VariableDeclaration,
    VariableStatement,
)

# Binding strength, loosest first.
ASSIGNMENT = 1
LOGICAL_OR = 2
LOGICAL_AND = 3
EQUALITY = 4
RELATIONAL = 5
ADDITIVE = 6
MULTIPLICATIVE = 7
UNARY = 8
CALL = 9
MEMBER = 10
PRIMARY = 11

binary_precedence: dict[str, int] = {
    "||": LOGICAL_OR,
    "&&": LOGICAL_AND,
    "==": EQUALITY,
    "!=": EQUALITY,
    "<": RELATIONAL,
    "<=": RELATIONAL,
    ">": RELATIONAL,
    ">=": RELATIONAL,
    "+": ADDITIVE,
    "-": ADDITIVE,
    "*": MULTIPLICATIVE,
    "/": MULTIPLICATIVE,
}


statement_types = (
    Program,
    BlockStatement,
    EmptyStatement,
    ExpressionStatement,
    VariableStatement,
    IfStatement,
)


def _snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def precedence(node: ASTNode) -> int:
    """Returns how tightly `node` binds when it appears as an operand."""
    if isinstance(node, AssignmentExpression):
        return ASSIGNMENT
    if isinstance(node, (BinaryExpression, LogicalExpression)):
        return binary_precedence[node.operator]
    if isinstance(node, UnaryExpression):
        return UNARY
    if isinstance(node, CallExpression):
        return CALL
    if isinstance(node, MemberExpression):
        return MEMBER
    return PRIMARY


class SourceEmitter:
    """Emits Letter source code from Letter AST nodes.

    Attributes:
        lines (list[str]): Accumulated lines of emitted source.
        indent (int): Current indentation level.

    Methods:
        emit(node): Emits a whole node and returns the resulting source.
        get_output(): Returns the emitted source as a string.
        emit_expr(node): Emits an expression node as a single-line string.
        _visit(node): Dispatches to the appropriate emit_* method for a statement.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return "    " * self.indent

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def emit(self, node: ASTNode) -> str:
        """Resets the buffer, emits `node` and returns the source text."""
        self.lines = []
        self.indent = 0
        if isinstance(node, statement_types):
            self._visit(node)
        else:
            self.lines.append(self.emit_expr(node))
        return self.get_output()

    def _line(self, text: str) -> None:
        self.lines.append(f"{self.indent_str()}{text}")

    def _visit(self, node: ASTNode) -> None:
        method = getattr(self, f"emit_{_snake(node.type)}", None)
        if method is None:
            raise NotImplementedError(f"No emitter for statement node: {node.type}")
        method(node)

    # Statements

    def emit_program(self, node: Program) -> None:
        for stmt in node.body:
            self._visit(stmt)

    def emit_block_statement(self, node: BlockStatement) -> None:
        self._emit_clause("", node)

    def emit_empty_statement(self, node: EmptyStatement) -> None:
        self._line(";")

    def emit_expression_statement(self, node: ExpressionStatement) -> None:
        self._line(f"{self.emit_expr(node.expression)};")

    def emit_variable_statement(self, node: VariableStatement) -> None:
        decls = ", ".join(self.emit_variable_declaration(d) for d in node.declarations)
        self._line(f"let {decls};")

    def emit_variable_declaration(self, node: VariableDeclaration) -> str:
        if node.init is None:
            return node.id.name
        return f"{node.id.name} = {self.emit_expr(node.init)}"

    def emit_if_statement(self, node: IfStatement, prefix: str = "") -> None:
        self._emit_clause(f"{prefix}if ({self.emit_expr(node.test)})", node.consequent)
        alternate = node.alternate
        if alternate is None:
            return

        if isinstance(node.consequent, BlockStatement):
            # Continue on the line that closed the consequent block.
            joined = self.lines.pop()[len(self.indent_str()):]
            header = f"{joined} else"
        else:
            header = "else"

        if isinstance(alternate, IfStatement):
            self.emit_if_statement(alternate, prefix=f"{header} ")
        else:
            self._emit_clause(header, alternate)

    def _emit_clause(self, header: str, body: ASTNode) -> None:
        """Emits `header` followed by a block or an indented single statement."""
        opener = f"{header} " if header else ""
        if isinstance(body, BlockStatement):
            if not body.body:
                self._line(f"{opener}{{}}")
                return
            self._line(f"{opener}{{")
            self.indent += 1
            for stmt in body.body:
                self._visit(stmt)
            self.indent -= 1
            self._line("}")
            return
        self._line(header)
        self.indent += 1
        self._visit(body)
        self.indent -= 1

    # Expressions

    def emit_expr(self, node: ASTNode) -> str:
        method = getattr(self, f"emit_expr_{_snake(node.type)}", None)
        if method is None:
            raise NotImplementedError(f"No emitter for expression node: {node.type}")
        result: str = method(node)
        return result

    def _operand(self, node: ASTNode, minimum: int) -> str:
        text = self.emit_expr(node)
        if precedence(node) < minimum:
            return f"({text})"
        return text

    def emit_expr_assignment_expression(self, node: AssignmentExpression) -> str:
        left = self._operand(node.left, MEMBER)
        right = self._operand(node.right, ASSIGNMENT)
        return f"{left} {node.operator} {right}"

    def emit_expr_binary_expression(self, node: BinaryExpression) -> str:
        level = binary_precedence[node.operator]
        left = self._operand(node.left, level)
        right = self._operand(node.right, level + 1)
        return f"{left} {node.operator} {right}"

    emit_expr_logical_expression = emit_expr_binary_expression

    def emit_expr_unary_expression(self, node: UnaryExpression) -> str:
        return f"{node.operator}{self._operand(node.argument, UNARY)}"

    def emit_expr_member_expression(self, node: MemberExpression) -> str:
        obj = self._operand(node.object, MEMBER)
        if node.computed:
            return f"{obj}[{self.emit_expr(node.property)}]"
        return f"{obj}.{self.emit_expr(node.property)}"

    def emit_expr_call_expression(self, node: CallExpression) -> str:
        callee = node.callee
        if isinstance(callee, (CallExpression, Super)):
            head = self.emit_expr(callee)
        else:
            head = self._operand(callee, MEMBER)
        args = ", ".join(self.emit_expr(arg) for arg in node.arguments)
        return f"{head}({args})"

    def emit_expr_super(self, node: Super) -> str:
        return "super"

    def emit_expr_identifier(self, node: Identifier) -> str:
        return node.name

    def emit_expr_numeric_literal(self, node: NumericLiteral) -> str:
        return str(node.value)

    def emit_expr_string_literal(self, node: StringLiteral) -> str:
        if '"' not in node.value:
            return f'"{node.value}"'
        if "'" not in node.value:
            return f"'{node.value}'"
        raise ValueError(f"String literal cannot hold both quote kinds: {node.value!r}")

    def emit_expr_boolean_literal(self, node: BooleanLiteral) -> str:
        return "true" if node.value else "false"

    def emit_expr_null_literal(self, node: NullLiteral) -> str:
        return "null"


def emit(node: ASTNode) -> str:
    """Returns the Letter source for `node`."""
    return SourceEmitter().emit(node)
