"""Formula lexer: one token at a time, no lookahead."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Token patterns
# ---------------------------------------------------------------------------

# Space, tab, CR, LF, FF, VT
BLANKS = " \t\r\n\f\v"

# Numbers start with a digit; the exponent is only taken when digits follow.
_NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]*)?(?:[eE][+-]?[0-9]+)?")

DIGITS = "0123456789"

OPERATORS = frozenset("+-*/%^@()cr")

COMMENT = "#"


class TokenKind(enum.Enum):
    END = "end"
    NUMBER = "number"
    OPERATOR = "operator"
    INVALID = "invalid"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str = ""
    value: float = 0.0

    def is_op(self, op: str) -> bool:
        return self.kind is TokenKind.OPERATOR and self.text == op


END = Token(TokenKind.END)


def skip_blanks(text: str, pos: int = 0) -> int:
    """Index of the first non-blank character at or after *pos*."""
    length = len(text)
    while pos < length and text[pos] in BLANKS:
        pos += 1
    return pos


def scan(text: str, pos: int) -> tuple[Token, int]:
    """Scan the token starting at or after *pos*.

    Returns ``(token, next_pos)``.  An unrecognized character yields an
    ``INVALID`` token and leaves *next_pos* on that character; the caller
    decides what to do about it.
    """
    pos = skip_blanks(text, pos)
    if pos >= len(text) or text[pos] == COMMENT:
        return END, len(text)

    ch = text[pos]
    if ch in DIGITS:
        m = _NUMBER_RE.match(text, pos)
        return Token(TokenKind.NUMBER, m.group(), float(m.group())), m.end()
    if ch in OPERATORS:
        return Token(TokenKind.OPERATOR, ch), pos + 1
    return Token(TokenKind.INVALID, ch), pos


def tokenize(text: str) -> list[Token]:
    """All tokens of *text*, up to and including the first END or INVALID."""
    tokens: list[Token] = []
    pos = 0
    while True:
        token, pos = scan(text, pos)
        tokens.append(token)
        if token.kind in (TokenKind.END, TokenKind.INVALID):
            return tokens
