"""
Regex lexer that turns raw text into typed tokens for chain building.

Whitespace is matched so that every character is accounted for, but it is
dropped from the returned stream unless ``keep_whitespace`` is requested.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List

from .errors import UnrecognizedTokenType


class TokenType(Enum):
    WORD = 1
    INTEGER = 2
    FLOATING = 3
    QUOTE = 4
    WSPACE = 5
    PAREN = 6
    EMPTY = 7
    STRING = 8


@dataclass(frozen=True)
class Token:
    kind: TokenType
    text: str


QUOTE_TEXT = "'"

TOKEN_RE = re.compile(
    r"""
    (?P<STRING>"(?:[^"\\]|\\.)*")
    |(?P<FLOATING>\d+\.\d+)
    |(?P<INTEGER>\d+)
    |(?P<WORD>[^\W\d][\w'\-]*)
    |(?P<QUOTE>')
    |(?P<WSPACE>\s+)
    |(?P<PAREN>[^\w\s])
    """,
    re.VERBOSE,
)


def iter_tokens(text: str, *, keep_whitespace: bool = False) -> Iterator[Token]:
    """Yield ``Token`` objects for ``text`` in source order."""

    for match in TOKEN_RE.finditer(text):
        kind = TokenType[match.lastgroup]
        if kind is TokenType.WSPACE and not keep_whitespace:
            continue
        yield Token(kind, match.group())


def tokenize(text: str) -> List[Token]:
    """Return the non-whitespace tokens of ``text``."""

    if not isinstance(text, str):
        raise TypeError("text must be a string")
    return list(iter_tokens(text))


def token_to_string(token: Token) -> str:
    """
    Map ``token`` to the text used as its graph node identity.

    Quote markers collapse to a single apostrophe. Whitespace and end markers
    carry no text and raise ``UnrecognizedTokenType``.
    """

    kind = token.kind
    if kind is TokenType.QUOTE:
        return QUOTE_TEXT
    if kind in (
        TokenType.WORD,
        TokenType.INTEGER,
        TokenType.FLOATING,
        TokenType.PAREN,
        TokenType.STRING,
    ):
        return token.text
    if kind is TokenType.EMPTY:
        raise UnrecognizedTokenType("End-of-stream marker has no text representation.")
    raise UnrecognizedTokenType(f"Unknown token kind {kind!r} for text {token.text!r}")


__all__ = [
    "QUOTE_TEXT",
    "Token",
    "TokenType",
    "iter_tokens",
    "token_to_string",
    "tokenize",
]
