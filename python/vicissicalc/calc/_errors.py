"""Formula error values.

Errors are ordinary values that flow out of the evaluator and get cached on
cells, the way a spreadsheet shows ``#DIV/0!`` in a cell instead of crashing.
"""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    NOT_A_FORMULA = "not-a-formula"
    SYNTAX = "syntax"
    DIVIDE_BY_ZERO = "divide-by-zero"
    OUT_OF_RANGE = "out-of-range"
    CYCLE = "cycle"
    NON_INTEGER = "non-integer"
    REFERENCE = "reference"
    DOMAIN = "domain"
    DEPTH = "depth"


class CalcError:
    """Error value produced by evaluating a formula.

    Use the class attributes (``CalcError.CYCLE`` etc.) for the fixed errors
    and ``CalcError.syntax(reason)`` for parse failures.  Two errors are equal
    when both kind and message match.
    """

    __slots__ = ("kind", "message")

    NOT_A_FORMULA: CalcError
    DIVIDE_BY_ZERO: CalcError
    OUT_OF_RANGE: CalcError
    CYCLE: CalcError
    NON_INTEGER: CalcError
    REFERENCE: CalcError
    DOMAIN: CalcError
    DEPTH: CalcError

    def __init__(self, kind: ErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message

    @classmethod
    def syntax(cls, reason: str) -> CalcError:
        return cls(ErrorKind.SYNTAX, f"Syntax error: {reason}")

    def __repr__(self) -> str:
        return f"CalcError({self.kind.name}, {self.message!r})"

    def __str__(self) -> str:
        return self.message

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CalcError):
            return self.kind is other.kind and self.message == other.message
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.kind, self.message))


# Singletons
CalcError.NOT_A_FORMULA = CalcError(ErrorKind.NOT_A_FORMULA, "No value for referred cell")
CalcError.DIVIDE_BY_ZERO = CalcError(ErrorKind.DIVIDE_BY_ZERO, "Divide by 0")
CalcError.OUT_OF_RANGE = CalcError(ErrorKind.OUT_OF_RANGE, "Cell out of range")
CalcError.CYCLE = CalcError(ErrorKind.CYCLE, "Cycle")
CalcError.NON_INTEGER = CalcError(ErrorKind.NON_INTEGER, "Non-integer cell coordinate")
CalcError.REFERENCE = CalcError(ErrorKind.REFERENCE, "Error in referred cell")
CalcError.DOMAIN = CalcError(ErrorKind.DOMAIN, "Math domain error")
CalcError.DEPTH = CalcError(ErrorKind.DEPTH, "Formula nesting too deep")


def propagated(err: CalcError) -> CalcError:
    """The error a referencing cell records when its reference hits *err*.

    Cycles and missing formulas pass through unchanged; anything else is
    reported once, on the cell that caused it, and shows up as the generic
    reference error everywhere downstream.
    """
    if err.kind in (ErrorKind.CYCLE, ErrorKind.NOT_A_FORMULA):
        return err
    return CalcError.REFERENCE
