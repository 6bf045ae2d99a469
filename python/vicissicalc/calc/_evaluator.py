"""Formula evaluator: recursive descent that computes while it parses.

No syntax tree is built.  Each parse routine returns the value of the text it
consumed, and binary operators are handled by precedence climbing::

    factor := number | '-' factor | 'c' | 'r' | '(' expr ')'
    expr   := factor (binop expr)*

The first error is latched on the :class:`Evaluation` and skips the input to
its end, so the rest of the parse winds down without doing any more work and
each formula reports a single error.
"""

from __future__ import annotations

import logging
import math

from vicissicalc.calc._errors import CalcError
from vicissicalc.calc._lexer import END, Token, TokenKind, scan, skip_blanks
from vicissicalc.calc._protocol import CellResolver

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Operator table
# ---------------------------------------------------------------------------

# op -> (left precedence, right precedence).  An operator is taken when its
# left precedence reaches the current context; its right operand is then
# parsed in the context of its right precedence.  Equal values make ``^``
# right-associative; ``@`` binds tighter than all arithmetic.
BINARY_OPS: dict[str, tuple[int, int]] = {
    "+": (1, 2),
    "-": (1, 2),
    "*": (3, 4),
    "/": (3, 4),
    "%": (3, 4),
    "^": (5, 5),
    "@": (7, 8),
}


def find_formula(text: str) -> str | None:
    """The formula body after ``=`` (leading blanks allowed), or None."""
    pos = skip_blanks(text)
    if text.startswith("=", pos):
        return text[pos + 1 :]
    return None


def _power(base: float, exponent: float) -> float | CalcError:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        negative = base < 0 and exponent.is_integer() and exponent % 2 == 1
        return -math.inf if negative else math.inf
    except ValueError:
        # Negative base with a fractional exponent, or zero to a negative power.
        return CalcError.DOMAIN


def _remainder(lhs: float, rhs: float) -> float | CalcError:
    try:
        return math.fmod(lhs, rhs)
    except ValueError:
        return CalcError.DOMAIN


# ---------------------------------------------------------------------------
# Evaluation context
# ---------------------------------------------------------------------------


class Evaluation:
    """State for evaluating one formula: cursor, current token, first error."""

    __slots__ = ("row", "col", "token", "error", "_text", "_pos", "_resolver")

    def __init__(
        self,
        formula: str,
        row: int,
        col: int,
        resolver: CellResolver | None = None,
    ) -> None:
        self.row = row
        self.col = col
        self.token: Token = END
        self.error: CalcError | None = None
        self._text = formula
        self._pos = 0
        self._resolver = resolver

    def fail(self, error: CalcError) -> None:
        """Record *error* unless one is already latched, and skip to the end."""
        if self.error is None:
            self.error = error
            self._pos = len(self._text)

    def lex(self) -> None:
        """Scan the next token and advance past it."""
        token, pos = scan(self._text, self._pos)
        if token.kind is TokenKind.INVALID:
            self.fail(CalcError.syntax("unknown token type"))
            token, pos = END, len(self._text)
        self.token = token
        self._pos = pos

    def run(self) -> float | CalcError:
        """Evaluate the whole formula."""
        self.lex()
        value = self.expr(0)
        if self.token.kind is not TokenKind.END:
            self.fail(CalcError.syntax("unexpected token"))
        if self.error is not None:
            return self.error
        return value

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def factor(self) -> float:
        token = self.token
        if token.kind is TokenKind.NUMBER:
            self.lex()
            return token.value
        if token.is_op("-"):
            self.lex()
            return -self.factor()
        if token.is_op("c"):
            self.lex()
            return float(self.col)
        if token.is_op("r"):
            self.lex()
            return float(self.row)
        if token.is_op("("):
            self.lex()
            value = self.expr(0)
            if not self.token.is_op(")"):
                self.fail(CalcError.syntax("expected ')'"))
            self.lex()
            return value
        self.fail(CalcError.syntax("expected a factor"))
        self.lex()
        return 0.0

    def expr(self, precedence: int) -> float:
        """Parse an infix expression in the right context of an operator of
        the given *precedence* (lower binds looser)."""
        lhs = self.factor()
        while True:
            token = self.token
            if token.kind is not TokenKind.OPERATOR or token.text not in BINARY_OPS:
                return lhs
            left, right = BINARY_OPS[token.text]
            if left < precedence:
                return lhs
            self.lex()
            lhs = self.apply(token.text, lhs, self.expr(right))

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def apply(self, op: str, lhs: float, rhs: float) -> float:
        if self.error is not None:
            return 0.0
        if op == "+":
            return lhs + rhs
        if op == "-":
            return lhs - rhs
        if op == "*":
            return lhs * rhs
        if op == "@":
            return self.refer(lhs, rhs)

        result: float | CalcError
        if op in ("/", "%") and rhs == 0:
            result = CalcError.DIVIDE_BY_ZERO
        elif op == "/":
            result = lhs / rhs
        elif op == "%":
            result = _remainder(lhs, rhs)
        elif op == "^":
            result = _power(lhs, rhs)
        else:
            raise ValueError(f"Unknown operator {op!r}")
        if isinstance(result, CalcError):
            self.fail(result)
            return 0.0
        return result

    def refer(self, row: float, col: float) -> float:
        """The ``row@col`` operator."""
        if not (row.is_integer() and col.is_integer()):
            self.fail(CalcError.NON_INTEGER)
            return 0.0
        if self._resolver is None:
            result: float | CalcError = CalcError.OUT_OF_RANGE
        else:
            result = self._resolver.reference(int(row), int(col))
        if isinstance(result, CalcError):
            self.fail(result)
            return 0.0
        return result


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def evaluate_formula(
    text: str,
    row: int,
    col: int,
    resolver: CellResolver | None = None,
) -> float | CalcError:
    """Evaluate cell text as it would be evaluated at (row, col).

    Text that is not a formula gives ``CalcError.NOT_A_FORMULA``.  Without a
    *resolver* there is no grid, so every ``@`` reference is out of range.
    Nesting deeper than the interpreter stack allows gives ``CalcError.DEPTH``.
    """
    formula = find_formula(text)
    if formula is None:
        return CalcError.NOT_A_FORMULA
    try:
        result = Evaluation(formula, row, col, resolver).run()
    except RecursionError:
        return CalcError.DEPTH
    if isinstance(result, CalcError):
        logger.debug("Formula %r at (%d, %d): %s", text, row, col, result)
    return result
