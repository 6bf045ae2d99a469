"""A single grid cell: raw text plus its cached result."""

from __future__ import annotations

from vicissicalc.calc._engine import CellState
from vicissicalc.calc._errors import CalcError
from vicissicalc.calc._evaluator import find_formula


class Cell:
    """One slot of a :class:`~vicissicalc.Sheet`.

    ``result`` is only meaningful while ``state`` is DONE.
    """

    __slots__ = ("row", "col", "text", "state", "result")

    def __init__(self, row: int, col: int, text: str = "") -> None:
        self.row = row
        self.col = col
        self.text = text
        self.state = CellState.STALE
        self.result: float | CalcError | None = None

    @property
    def formula(self) -> str | None:
        """Formula body after ``=``, or None for literal text."""
        return find_formula(self.text)

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    def invalidate(self) -> None:
        self.state = CellState.STALE
        self.result = None

    def __repr__(self) -> str:
        return f"<Cell ({self.row}, {self.col}) {self.text!r} {self.state.name}>"
