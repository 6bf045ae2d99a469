"""Protocols for the seams between the evaluator, the engine and the grid."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from vicissicalc.calc._errors import CalcError


@runtime_checkable
class CellResolver(Protocol):
    """What the ``@`` operator needs from whoever owns the cells."""

    def reference(self, row: int, col: int) -> float | CalcError:
        """Value of the cell at (row, col) as seen by a formula referring to it.

        Errors come back already translated for the referring cell: cycles and
        missing formulas pass through, other remote errors become the generic
        reference error, and bad coordinates are out of range.
        """
        ...


class FormulaFunction(Protocol):
    """Signature of ``evaluate_formula``; the engine accepts any such callable."""

    def __call__(
        self,
        text: str,
        row: int,
        col: int,
        resolver: CellResolver | None = None,
    ) -> float | CalcError:
        ...
