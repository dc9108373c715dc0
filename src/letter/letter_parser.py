"""
Letter Language Parser

Parses Letter source text into a structured abstract syntax tree (AST).

This module implements a predictive recursive-descent parser with a single
token of lookahead. The parser pulls tokens from a `Tokenizer` exactly when it
needs one; it never backtracks and never re-reads a token. Operator precedence
is expressed by layering one production per precedence level, each delegating
to the next tighter-binding level for its operands.

Grammar (loosest binding first)
-------------------------------
    Program               : StatementList
    StatementList         : Statement+
    Statement             : ';' | Block | 'let' ... | 'if' ... | Expression ';'
    Expression            : AssignmentExpression
    AssignmentExpression  : LogicalOR (ASSIGN AssignmentExpression)?
    LogicalOR             : LogicalAND ('||' LogicalAND)*
    LogicalAND            : Equality ('&&' Equality)*
    Equality              : Relational (('==' | '!=') Relational)*
    Relational            : Additive (('<' | '<=' | '>' | '>=') Additive)*
    Additive              : Multiplicative (('+' | '-') Multiplicative)*
    Multiplicative        : Unary (('*' | '/') Unary)*
    Unary                 : ('+' | '-' | '!') Unary | LeftHandSide
    LeftHandSide          : CallMember
    CallMember            : ('super' | Member) Arguments*
    Member                : Primary ('.' Identifier | '[' Expression ']')*
    Primary               : Literal | '(' Expression ')' | Identifier

Entry Points
------------
- `parse(text)`: Parse a full program into a `Program` node.
- `Parser().parse(text)`: Same, reusing one parser instance across inputs.

Raises
------
SyntaxError
    Raised on the first unexpected or missing token, on an invalid assignment
    target, or when no primary expression can start at the lookahead.
LexError
    Raised by the tokenizer when it meets a character that starts no token.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from letter.letter_ast import (
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    EmptyStatement,
    Expression,
    ExpressionStatement,
    Identifier,
    IfStatement,
    Literal,
    LogicalExpression,
    MemberExpression,
    NullLiteral,
    NumericLiteral,
    Program,
    Statement,
    StringLiteral,
    Super,
    UnaryExpression,
    VariableDeclaration,
    VariableStatement,
)
from letter.letter_constants import TokenType, literal_tokens
from letter.letter_lexer import Token, Tokenizer

logger = logging.getLogger(__name__)


class Parser:
    """
    Letter Parser Class

    Transforms Letter source text into a `Program` AST. Each grammar rule is a
    method; the statement-level and primary-level rules dispatch on the kind
    of the current lookahead token.

    Attributes
    ----------
    tokenizer : Tokenizer
        The lazily-pulled token source.
    lookahead : Token | None
        The single unconsumed token, or None at end of input.
    """

    def __init__(self) -> None:
        self.tokenizer: Tokenizer = Tokenizer()
        self.lookahead: Token | None = None

    def parse(self, string: str) -> Program:
        """Parses `string` into a `Program` node."""
        self.tokenizer.init(string)

        # Prime the tokenizer to obtain the first lookahead.
        self.lookahead = self.tokenizer.get_next_token()

        program = self.program()
        logger.debug("parsed program with %d statement(s)", len(program.body))
        return program

    # Statements

    def program(self) -> Program:
        return Program(body=self.statement_list())

    def statement_list(self, stop_lookahead: TokenType | None = None) -> list[Statement]:
        """Parses statements until end of input or the `stop_lookahead` kind.

        The stop token itself is not consumed.
        """
        statements = [self.statement()]
        while self.lookahead is not None and self.lookahead.type != stop_lookahead:
            statements.append(self.statement())
        return statements

    def statement(self) -> Statement:
        kind = self.lookahead.type if self.lookahead is not None else None
        match kind:
            case TokenType.SEMICOLON:
                return self.empty_statement()
            case TokenType.LBRACE:
                return self.block_statement()
            case TokenType.LET:
                return self.variable_statement()
            case TokenType.IF:
                return self.if_statement()
            case _:
                return self.expression_statement()

    def empty_statement(self) -> EmptyStatement:
        self._eat(TokenType.SEMICOLON)
        return EmptyStatement()

    def block_statement(self) -> BlockStatement:
        self._eat(TokenType.LBRACE)
        body = (
            self.statement_list(TokenType.RBRACE)
            if not self._lookahead_is(TokenType.RBRACE)
            else []
        )
        self._eat(TokenType.RBRACE)
        return BlockStatement(body=body)

    def variable_statement(self) -> VariableStatement:
        self._eat(TokenType.LET)
        declarations = self.variable_declaration_list()
        self._eat(TokenType.SEMICOLON)
        return VariableStatement(declarations=declarations)

    def variable_declaration_list(self) -> list[VariableDeclaration]:
        declarations = [self.variable_declaration()]
        while self._lookahead_is(TokenType.COMMA):
            self._eat(TokenType.COMMA)
            declarations.append(self.variable_declaration())
        return declarations

    def variable_declaration(self) -> VariableDeclaration:
        id_ = self.identifier()
        # No initializer when the declaration is followed by `,` or `;`.
        init = (
            self.variable_initializer()
            if not self._lookahead_is(TokenType.COMMA, TokenType.SEMICOLON)
            else None
        )
        return VariableDeclaration(id=id_, init=init)

    def variable_initializer(self) -> Expression:
        self._eat(TokenType.SIMPLE_ASSIGN)
        return self.assignment_expression()

    def if_statement(self) -> IfStatement:
        self._eat(TokenType.IF)
        self._eat(TokenType.LPAREN)
        test = self.expression()
        self._eat(TokenType.RPAREN)

        consequent = self.statement()
        alternate: Statement | None = None
        if self._lookahead_is(TokenType.ELSE):
            self._eat(TokenType.ELSE)
            alternate = self.statement()

        return IfStatement(test=test, consequent=consequent, alternate=alternate)

    def expression_statement(self) -> ExpressionStatement:
        expression = self.expression()
        self._eat(TokenType.SEMICOLON)
        return ExpressionStatement(expression=expression)

    # Expressions

    def expression(self) -> Expression:
        return self.assignment_expression()

    def assignment_expression(self) -> Expression:
        left = self.logical_or_expression()

        if not self._lookahead_is(TokenType.SIMPLE_ASSIGN, TokenType.COMPLEX_ASSIGN):
            return left

        operator = self.assignment_operator().value
        target = self._check_valid_assignment_target(left)
        return AssignmentExpression(
            operator=operator,
            left=target,
            right=self.assignment_expression(),
        )

    def assignment_operator(self) -> Token:
        if self._lookahead_is(TokenType.SIMPLE_ASSIGN):
            return self._eat(TokenType.SIMPLE_ASSIGN)
        return self._eat(TokenType.COMPLEX_ASSIGN)

    def logical_or_expression(self) -> Expression:
        return self._binary_expression(
            self.logical_and_expression, TokenType.LOGICAL_OR, LogicalExpression
        )

    def logical_and_expression(self) -> Expression:
        return self._binary_expression(
            self.equality_expression, TokenType.LOGICAL_AND, LogicalExpression
        )

    def equality_expression(self) -> Expression:
        return self._binary_expression(
            self.relational_expression, TokenType.EQUALITY_OPERATOR, BinaryExpression
        )

    def relational_expression(self) -> Expression:
        return self._binary_expression(
            self.additive_expression, TokenType.RELATIONAL_OPERATOR, BinaryExpression
        )

    def additive_expression(self) -> Expression:
        return self._binary_expression(
            self.multiplicative_expression,
            TokenType.ADDITIVE_OPERATOR,
            BinaryExpression,
        )

    def multiplicative_expression(self) -> Expression:
        return self._binary_expression(
            self.unary_expression, TokenType.MULTIPLICATIVE_OPERATOR, BinaryExpression
        )

    def unary_expression(self) -> Expression:
        token = self.lookahead
        if token is not None and token.type in (
            TokenType.ADDITIVE_OPERATOR,
            TokenType.LOGICAL_NOT,
        ):
            operator = self._eat(token.type).value
            return UnaryExpression(operator=operator, argument=self.unary_expression())
        return self.left_hand_side_expression()

    def left_hand_side_expression(self) -> Expression:
        return self.call_member_expression()

    def call_member_expression(self) -> Expression:
        if self._lookahead_is(TokenType.SUPER):
            return self._call_expression(self.super_())

        member = self.member_expression()
        if self._lookahead_is(TokenType.LPAREN):
            return self._call_expression(member)
        return member

    def _call_expression(self, callee: Expression | Super) -> CallExpression:
        call = CallExpression(callee=callee, arguments=self.arguments())
        if self._lookahead_is(TokenType.LPAREN):
            return self._call_expression(call)
        return call

    def arguments(self) -> list[Expression]:
        self._eat(TokenType.LPAREN)
        argument_list = (
            self.argument_list() if not self._lookahead_is(TokenType.RPAREN) else []
        )
        self._eat(TokenType.RPAREN)
        return argument_list

    def argument_list(self) -> list[Expression]:
        argument_list = [self.assignment_expression()]
        while self._lookahead_is(TokenType.COMMA):
            self._eat(TokenType.COMMA)
            argument_list.append(self.assignment_expression())
        return argument_list

    def super_(self) -> Super:
        self._eat(TokenType.SUPER)
        return Super()

    def member_expression(self) -> Expression:
        object_ = self.primary_expression()

        while self._lookahead_is(TokenType.DOT, TokenType.LBRACKET):
            if self._lookahead_is(TokenType.DOT):
                self._eat(TokenType.DOT)
                object_ = MemberExpression(
                    computed=False, object=object_, property=self.identifier()
                )
            else:
                self._eat(TokenType.LBRACKET)
                property_ = self.expression()
                self._eat(TokenType.RBRACKET)
                object_ = MemberExpression(
                    computed=True, object=object_, property=property_
                )

        return object_

    def primary_expression(self) -> Expression:
        if self.lookahead is None:
            raise SyntaxError("Unexpected end of input, expected primary expression")
        if self._is_literal(self.lookahead.type):
            return self.literal(self.lookahead.type)
        match self.lookahead.type:
            case TokenType.LPAREN:
                return self.parenthesized_expression()
            case TokenType.IDENTIFIER:
                return self.identifier()
            case _:
                raise SyntaxError(
                    f'Unexpected primary expression: "{self.lookahead.value}"'
                )

    def parenthesized_expression(self) -> Expression:
        self._eat(TokenType.LPAREN)
        expression = self.expression()
        self._eat(TokenType.RPAREN)
        return expression

    def identifier(self) -> Identifier:
        name = self._eat(TokenType.IDENTIFIER).value
        return Identifier(name=name)

    # Literals

    def literal(self, token_type: TokenType) -> Literal:
        match token_type:
            case TokenType.NUMBER:
                return self.numeric_literal()
            case TokenType.STRING:
                return self.string_literal()
            case TokenType.TRUE:
                return self.boolean_literal(True)
            case TokenType.FALSE:
                return self.boolean_literal(False)
            case TokenType.NULL:
                return self.null_literal()
        raise SyntaxError("Literal: unexpected literal production")  # pragma: no cover

    def numeric_literal(self) -> NumericLiteral:
        token = self._eat(TokenType.NUMBER)
        return NumericLiteral(value=int(token.value))

    def string_literal(self) -> StringLiteral:
        token = self._eat(TokenType.STRING)
        return StringLiteral(value=token.value[1:-1])

    def boolean_literal(self, value: bool) -> BooleanLiteral:
        self._eat(TokenType.TRUE if value else TokenType.FALSE)
        return BooleanLiteral(value=value)

    def null_literal(self) -> NullLiteral:
        self._eat(TokenType.NULL)
        return NullLiteral()

    # Helpers

    def _binary_expression(
        self,
        operand: Callable[[], Expression],
        operator_type: TokenType,
        node_cls: type[BinaryExpression] | type[LogicalExpression],
    ) -> Expression:
        """Generic left-associative binary operator loop.

        Parses one operand, then folds `operator operand` pairs into a
        left-deepening tree while the lookahead is `operator_type`.
        """
        left = operand()
        while self._lookahead_is(operator_type):
            operator = self._eat(operator_type).value
            right = operand()
            left = node_cls(operator=operator, left=left, right=right)
        return left

    def _check_valid_assignment_target(
        self, node: Expression
    ) -> Identifier | MemberExpression:
        if isinstance(node, (Identifier, MemberExpression)):
            return node
        raise SyntaxError("Invalid left-hand side in assignment expression")

    def _is_literal(self, token_type: TokenType) -> bool:
        return token_type in literal_tokens

    def _lookahead_is(self, *types: TokenType) -> bool:
        return self.lookahead is not None and self.lookahead.type in types

    def _eat(self, token_type: TokenType) -> Token:
        """Consumes the lookahead if it is of `token_type` and advances.

        Raises:
            SyntaxError: At end of input, or if the lookahead has another kind.
        """
        token = self.lookahead

        if token is None:
            raise SyntaxError(
                f'Unexpected end of input, expected "{token_type.value}"'
            )

        if token.type != token_type:
            raise SyntaxError(
                f'Unexpected token: "{token.value}", expected "{token_type.value}"'
            )

        self.lookahead = self.tokenizer.get_next_token()
        return token


def parse(string: str) -> Program:
    """Parses Letter source text into a `Program` node."""
    return Parser().parse(string)


__all__ = ["Parser", "parse"]
