"""
Token kinds and the ordered tokenizer rule table for the Letter language.

The tokenizer tries `token_spec` strictly in declaration order and the first
pattern that matches wins, so more specific rules (keywords, two-character
operators) must appear before the general ones (identifiers, one-character
operators). Rules whose kind is `None` are skipped (whitespace and comments).

Exports:
    - TokenType
    - token_spec
    - keyword_tokens
    - reserved_words
    - literal_tokens
"""

import re
from enum import Enum


class TokenType(str, Enum):
    """Closed set of lexical categories produced by the tokenizer."""

    # Delimiters
    SEMICOLON = ";"
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    DOT = "."
    LBRACKET = "["
    RBRACKET = "]"

    # Keywords
    LET = "let"
    IF = "if"
    ELSE = "else"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    WHILE = "while"
    DO = "do"
    FOR = "for"
    DEF = "def"
    RETURN = "return"
    CLASS = "class"
    EXTENDS = "extends"
    SUPER = "super"
    NEW = "new"
    THIS = "this"

    # Operator classes
    EQUALITY_OPERATOR = "EQUALITY_OPERATOR"
    LOGICAL_AND = "LOGICAL_AND"
    LOGICAL_OR = "LOGICAL_OR"
    LOGICAL_NOT = "LOGICAL_NOT"
    SIMPLE_ASSIGN = "SIMPLE_ASSIGN"
    COMPLEX_ASSIGN = "COMPLEX_ASSIGN"
    RELATIONAL_OPERATOR = "RELATIONAL_OPERATOR"
    ADDITIVE_OPERATOR = "ADDITIVE_OPERATOR"
    MULTIPLICATIVE_OPERATOR = "MULTIPLICATIVE_OPERATOR"

    # Literals and names
    NUMBER = "NUMBER"
    STRING = "STRING"
    IDENTIFIER = "IDENTIFIER"

    def __str__(self) -> str:
        return self.value


keyword_tokens: tuple[TokenType, ...] = (
    TokenType.LET,
    TokenType.IF,
    TokenType.ELSE,
    TokenType.TRUE,
    TokenType.FALSE,
    TokenType.NULL,
    TokenType.WHILE,
    TokenType.DO,
    TokenType.FOR,
    TokenType.DEF,
    TokenType.RETURN,
    TokenType.CLASS,
    TokenType.EXTENDS,
    TokenType.SUPER,
    TokenType.NEW,
    TokenType.THIS,
)

reserved_words: frozenset[str] = frozenset(t.value for t in keyword_tokens)

literal_tokens: frozenset[TokenType] = frozenset(
    {
        TokenType.NUMBER,
        TokenType.STRING,
        TokenType.TRUE,
        TokenType.FALSE,
        TokenType.NULL,
    }
)

_delimiters: tuple[TokenType, ...] = (
    TokenType.SEMICOLON,
    TokenType.LBRACE,
    TokenType.RBRACE,
    TokenType.LPAREN,
    TokenType.RPAREN,
    TokenType.COMMA,
    TokenType.DOT,
    TokenType.LBRACKET,
    TokenType.RBRACKET,
)

token_spec: list[tuple[re.Pattern[str], TokenType | None]] = [
    # Whitespace and comments
    (re.compile(r"\s+"), None),
    (re.compile(r"//.*"), None),
    (re.compile(r"/\*[\s\S]*?\*/"), None),
    # Delimiters
    *[(re.compile(re.escape(t.value)), t) for t in _delimiters],
    # Keywords
    *[(re.compile(rf"{t.value}(?!\w)"), t) for t in keyword_tokens],
    # Equality: ==, !=
    (re.compile(r"[=!]="), TokenType.EQUALITY_OPERATOR),
    # Logical: &&, ||, !
    (re.compile(r"&&"), TokenType.LOGICAL_AND),
    (re.compile(r"\|\|"), TokenType.LOGICAL_OR),
    (re.compile(r"!"), TokenType.LOGICAL_NOT),
    # Assignment: =, *=, /=, +=, -=
    (re.compile(r"="), TokenType.SIMPLE_ASSIGN),
    (re.compile(r"[*/+\-]="), TokenType.COMPLEX_ASSIGN),
    # Relational: >, >=, <, <=
    (re.compile(r"[><]=?"), TokenType.RELATIONAL_OPERATOR),
    # Math
    (re.compile(r"[+\-]"), TokenType.ADDITIVE_OPERATOR),
    (re.compile(r"[*/]"), TokenType.MULTIPLICATIVE_OPERATOR),
    # Literals
    (re.compile(r"\d+"), TokenType.NUMBER),
    (re.compile(r'"[^"]*"'), TokenType.STRING),
    (re.compile(r"'[^']*'"), TokenType.STRING),
    # Names
    (re.compile(r"\w+"), TokenType.IDENTIFIER),
]


__all__ = [
    "TokenType",
    "keyword_tokens",
    "literal_tokens",
    "reserved_words",
    "token_spec",
]
