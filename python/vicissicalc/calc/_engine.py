"""Recalculation engine: lazy, memoized, cycle-safe cell evaluation.

There is no dependency graph.  Each cell carries a freshness marker::

    STALE -> IN_PROGRESS -> DONE (value or error)

``resolve`` evaluates a stale cell on demand; the evaluator's ``@`` operator
calls back into ``reference``, so dependencies are discovered and evaluated
depth-first as formulas read them.  A reference that lands on a cell still
marked IN_PROGRESS has gone round a cycle.  Any text edit resets every cell to
STALE.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

from vicissicalc.calc._errors import CalcError, propagated
from vicissicalc.calc._evaluator import evaluate_formula
from vicissicalc.calc._protocol import FormulaFunction

if TYPE_CHECKING:
    from vicissicalc._cell import Cell
    from vicissicalc._sheet import Sheet

logger = logging.getLogger(__name__)


class CellState(enum.Enum):
    STALE = "stale"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class RecalcEngine:
    """Computes cell values for a :class:`~vicissicalc.Sheet`.

    Usage::

        engine = RecalcEngine(sheet)
        value = engine.resolve(0, 0)   # float or CalcError

    *evaluate* defaults to :func:`evaluate_formula`; any callable with the
    same signature can stand in for it.
    """

    __slots__ = ("_sheet", "_evaluate")

    def __init__(
        self,
        sheet: Sheet,
        evaluate: FormulaFunction = evaluate_formula,
    ) -> None:
        self._sheet = sheet
        self._evaluate = evaluate

    def resolve(self, row: int, col: int) -> float | CalcError:
        """Fresh value of the cell at (row, col), computing it if stale.

        A cell that is mid-computation answers ``CalcError.CYCLE`` to the
        caller and keeps its own IN_PROGRESS marker.
        """
        if not self._sheet.in_range(row, col):
            return CalcError.OUT_OF_RANGE
        cell = self._sheet.cell(row, col)
        if cell.state is CellState.IN_PROGRESS:
            logger.debug("Cycle reaches (%d, %d)", row, col)
            return CalcError.CYCLE
        if cell.state is CellState.STALE:
            self._recalculate(cell)
        result = cell.result
        if result is None:
            raise RuntimeError(f"Cell ({row}, {col}) has no result after recalculation")
        return result

    def reference(self, row: int, col: int) -> float | CalcError:
        """Value of (row, col) as seen through a ``row@col`` reference."""
        if not self._sheet.in_range(row, col):
            return CalcError.OUT_OF_RANGE
        result = self.resolve(row, col)
        if isinstance(result, CalcError):
            return propagated(result)
        return result

    def _recalculate(self, cell: Cell) -> None:
        # The marker must be set before recursing into dependencies.
        cell.state = CellState.IN_PROGRESS
        try:
            result = self._evaluate(cell.text, cell.row, cell.col, self)
        except RecursionError:
            # Stack is nearly exhausted here; record the error and unwind.
            result = CalcError.DEPTH
        except BaseException:
            cell.invalidate()
            raise
        cell.result = result
        cell.state = CellState.DONE
        if isinstance(result, CalcError):
            self._sheet.notify(result.message)
        logger.debug("Recalculated (%d, %d): %r", cell.row, cell.col, result)
