"""
Lexical analyzer for the Letter programming language.

This module turns raw source text into tokens, one at a time, on demand:

Classes:
    Token: Immutable (type, value) pair for a single lexeme.
    LexError: Raised when no rule matches the character at the cursor.
    Tokenizer: Lazily pulls the next token from a source string.

Features:
    - Skips whitespace, `//` line comments and `/* */` block comments
    - Priority-by-order matching against the rule table in `letter_constants`
      (the first rule that matches wins, not the longest one)
    - Recognizes:
        * Keywords (whole words only: `ifx` is an identifier)
        * Integers
        * Strings in double or single quotes (raw, quotes kept, no escapes)
        * Operators, delimiters and identifiers

Raises:
    LexError: If the character at the cursor starts no known token.

Example:
    >>> tokenizer = Tokenizer()
    >>> tokenizer.init("let x = 42;")
    >>> tokenizer.get_next_token()
    Token(let, 'let')

Exports:
    - LexError
    - Token
    - Tokenizer
    - tokenize
"""

import logging
import re
from collections.abc import Iterator
from typing import NamedTuple

from letter.letter_constants import TokenType, token_spec

logger = logging.getLogger(__name__)


class Token(NamedTuple):
    """A single lexical token.

    Attributes:
        type (TokenType): The lexical category.
        value (str): The exact matched text (string tokens keep their quotes).
    """

    type: TokenType
    value: str

    def __repr__(self) -> str:
        return f"Token({self.type!s}, {self.value!r})"


class LexError(SyntaxError):
    """Raised when the tokenizer finds a character that starts no token.

    Attributes:
        char (str): The offending character.
        offset (int): Zero-based cursor position of the character.
    """

    def __init__(self, char: str, offset: int) -> None:
        super().__init__(f'Unexpected token: "{char}" at offset {offset}')
        self.char = char
        self.offset = offset


class Tokenizer:
    """Lazily pulls tokens from a source string.

    The tokenizer keeps only a cursor into the source; it never builds a token
    list of its own. Call `init()` before each new input.

    Attributes:
        string (str): The source being scanned.
        cursor (int): Index of the next unread character.
    """

    def __init__(self) -> None:
        self.string = ""
        self.cursor = 0

    def init(self, string: str) -> None:
        """Resets scanning state to the start of `string`."""
        self.string = string
        self.cursor = 0
        logger.debug("tokenizer initialized with %d characters", len(string))

    def is_eof(self) -> bool:
        return self.cursor == len(self.string)

    def has_more_tokens(self) -> bool:
        return self.cursor < len(self.string)

    def get_next_token(self) -> Token | None:
        """Returns the next significant token, or None at end of input.

        Skip rules (whitespace and comments) consume input and scanning
        continues from the new cursor position.

        Raises:
            LexError: If no rule matches at the cursor.
        """
        while self.has_more_tokens():
            for regexp, token_type in token_spec:
                token_value = self._match(regexp)
                if token_value is None:
                    continue
                if token_type is None:
                    break
                return Token(token_type, token_value)
            else:
                raise LexError(self.string[self.cursor], self.cursor)
        return None

    def _match(self, regexp: re.Pattern[str]) -> str | None:
        matched = regexp.match(self.string, self.cursor)
        if matched is None or not matched.group(0):
            return None
        self.cursor += len(matched.group(0))
        return matched.group(0)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.get_next_token()
            if token is None:
                return
            yield token


def tokenize(string: str) -> list[Token]:
    """Returns every significant token of `string`."""
    tokenizer = Tokenizer()
    tokenizer.init(string)
    return list(tokenizer)


__all__ = ["LexError", "Token", "Tokenizer", "tokenize"]
