"""
Scanner for calc expressions.

References are replaced by plain identifiers before scanning, so the token
set only covers numbers, identifiers, the four operators and punctuation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum


class TokenKind(StrEnum):
    NUMBER = "number"
    IDENT = "ident"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    EOF = "end of expression"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    value: str
    pos: int


class ExpressionTokenError(Exception):
    """Raised for a character that starts no token."""

    def __init__(self, message: str, pos: int) -> None:
        super().__init__(message)
        self.pos = pos


# One alternation per token class; the group name selects the kind.
_SCANNER = re.compile(
    r"""
    (?P<space>\s+)
  | (?P<number>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)
  | (?P<ident>[A-Za-z_]\w*)
  | (?P<punct>[-+*/(),])
    """,
    re.VERBOSE,
)


def tokenize(source: str) -> list[Token]:
    """Split ``source`` into tokens, ending with an EOF token."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(source):
        m = _SCANNER.match(source, pos)
        if m is None:
            raise ExpressionTokenError(f"Unexpected character: {source[pos]!r}", pos)
        group = m.lastgroup
        text = m.group()
        if group == "number":
            tokens.append(Token(TokenKind.NUMBER, text, pos))
        elif group == "ident":
            tokens.append(Token(TokenKind.IDENT, text, pos))
        elif group == "punct":
            tokens.append(Token(TokenKind(text), text, pos))
        pos = m.end()
    tokens.append(Token(TokenKind.EOF, "", len(source)))
    return tokens
