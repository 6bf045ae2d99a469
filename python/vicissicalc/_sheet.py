"""Sheet: the fixed-size grid of cells and the entry point for edits and values."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from vicissicalc._cell import Cell
from vicissicalc.calc._engine import RecalcEngine
from vicissicalc.calc._errors import CalcError
from vicissicalc.calc._evaluator import evaluate_formula
from vicissicalc.calc._protocol import FormulaFunction

logger = logging.getLogger(__name__)

NROWS = 20
NCOLS = 4


class Sheet:
    """A grid of ``nrows`` x ``ncols`` cells, all present from the start.

    Usage::

        sheet = Sheet()
        sheet.set_text(0, 0, "=2+3")
        sheet.set_text(1, 0, "=0@0 * 10")
        sheet.get_value(1, 0)   # 50.0

    Any edit invalidates every cached result.  Formula errors are returned
    as :class:`CalcError` values; the first one raised since the last
    :meth:`take_notice` is also kept as the sheet's pending notice.
    """

    __slots__ = ("_nrows", "_ncols", "_cells", "_engine", "_notice")

    def __init__(
        self,
        nrows: int = NROWS,
        ncols: int = NCOLS,
        evaluate: FormulaFunction = evaluate_formula,
    ) -> None:
        if nrows <= 0 or ncols <= 0:
            raise ValueError(f"Sheet dimensions must be positive, got {nrows}x{ncols}")
        self._nrows = nrows
        self._ncols = ncols
        self._cells = [[Cell(r, c) for c in range(ncols)] for r in range(nrows)]
        self._engine = RecalcEngine(self, evaluate)
        self._notice: str | None = None

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    @property
    def nrows(self) -> int:
        return self._nrows

    @property
    def ncols(self) -> int:
        return self._ncols

    @property
    def dimensions(self) -> tuple[int, int]:
        return (self._nrows, self._ncols)

    def in_range(self, row: int, col: int) -> bool:
        return 0 <= row < self._nrows and 0 <= col < self._ncols

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_range(row, col):
            raise IndexError(
                f"Cell ({row}, {col}) outside {self._nrows}x{self._ncols} sheet"
            )
        return self._cells[row][col]

    def __getitem__(self, key: tuple[int, int]) -> Cell:
        """``sheet[row, col]`` -> Cell."""
        row, col = key
        return self.cell(row, col)

    def text(self, row: int, col: int) -> str:
        return self.cell(row, col).text

    def iter_rows(self) -> Iterator[list[Cell]]:
        for row in self._cells:
            yield list(row)

    def iter_cells(self) -> Iterator[Cell]:
        """All cells, row by row."""
        for row in self._cells:
            yield from row

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def set_text(self, row: int, col: int, text: str) -> None:
        """Replace a cell's text and invalidate every cached result."""
        self.set_text_only(row, col, text)
        self.text_updated()

    def set_text_only(self, row: int, col: int, text: str) -> None:
        """Replace a cell's text without invalidating.

        For batches of edits; call :meth:`text_updated` once afterwards.
        Text is one line; line breaks raise ValueError.
        """
        if "\n" in text or "\r" in text:
            raise ValueError(f"Cell text must be a single line, got {text!r}")
        self.cell(row, col).text = text

    def text_updated(self) -> None:
        """Mark every cell stale, since any formula may read any cell."""
        for cell in self.iter_cells():
            cell.invalidate()
        logger.debug("Invalidated %d cells", self._nrows * self._ncols)

    def copy_text(self, src_row: int, src_col: int, dst_row: int, dst_col: int) -> None:
        """Copy one cell's raw text into another."""
        self.set_text(dst_row, dst_col, self.text(src_row, src_col))

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    @property
    def engine(self) -> RecalcEngine:
        return self._engine

    def get_value(self, row: int, col: int) -> float | CalcError:
        """Computed value of (row, col); out-of-range coordinates are an error value."""
        return self._engine.resolve(row, col)

    def evaluate(self, text: str, row: int, col: int) -> float | CalcError:
        """Evaluate *text* as if it sat at (row, col), reading this sheet."""
        return evaluate_formula(text, row, col, self._engine)

    # ------------------------------------------------------------------
    # Notices
    # ------------------------------------------------------------------

    def notify(self, message: str) -> None:
        """Post a notice for the user unless one is already pending."""
        if self._notice is None:
            self._notice = message

    @property
    def notice(self) -> str | None:
        return self._notice

    def take_notice(self) -> str | None:
        """Return the pending notice and clear it."""
        notice, self._notice = self._notice, None
        return notice

    def __repr__(self) -> str:
        return f"<Sheet {self._nrows}x{self._ncols}>"
