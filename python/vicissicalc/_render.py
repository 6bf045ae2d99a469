"""Plain-text rendering of a sheet in the values or formulas view."""

from __future__ import annotations

import enum

from vicissicalc._sheet import Sheet
from vicissicalc.calc._engine import CellState
from vicissicalc.calc._errors import CalcError

COLWIDTH = 18
LINE_WIDTH = 80

_FORMULAS_LABEL = "(formulas)"


class View(enum.Enum):
    VALUES = "values"
    FORMULAS = "formulas"


def format_value(value: float) -> str:
    return "%g" % value


def fit(text: str, width: int = COLWIDTH) -> str:
    """Cut *text* to *width* characters, ending in ``...`` when cut."""
    if len(text) > width:
        return text[: width - 3] + "..."
    return text


def cell_display(sheet: Sheet, row: int, col: int, view: View = View.VALUES) -> tuple[str, bool]:
    """What the cell shows, and whether it shows an error.

    Literal cells show their text in both views; formula cells show the
    formula body in the formulas view and the computed value otherwise.
    """
    cell = sheet.cell(row, col)
    formula = cell.formula
    if view is View.FORMULAS or formula is None:
        return (cell.text if formula is None else formula), False
    value = sheet.get_value(row, col)
    if isinstance(value, CalcError):
        return value.message, True
    return format_value(value), False


def _focus_error(sheet: Sheet, row: int, col: int) -> str | None:
    cell = sheet.cell(row, col)
    if cell.state is CellState.DONE and isinstance(cell.result, CalcError):
        return cell.result.message
    return None


def render(
    sheet: Sheet,
    view: View = View.VALUES,
    cursor: tuple[int, int] = (0, 0),
) -> list[str]:
    """Lay out one frame of the sheet as lines of text.

    The frame is the cursor cell's raw text, a column header, one line per
    row, and a status line.  The status line shows the sheet's pending notice
    (which rendering consumes), or else the cursor cell's own error.
    """
    cur_row, cur_col = cursor
    cursor_text = sheet.text(cur_row, cur_col)
    lines = [cursor_text[: LINE_WIDTH - 1].ljust(LINE_WIDTH - 1)]

    label = _FORMULAS_LABEL if view is View.FORMULAS else " " * len(_FORMULAS_LABEL)
    header = label + "0".rjust(COLWIDTH - len(_FORMULAS_LABEL) + 3)
    header += "".join(" " + str(c).rjust(COLWIDTH) for c in range(1, sheet.ncols))
    lines.append(header)

    for r in range(sheet.nrows):
        parts = [str(r).rjust(2)]
        for c in range(sheet.ncols):
            text, _ = cell_display(sheet, r, c, view)
            parts.append(" " + fit(text.rjust(COLWIDTH)))
        lines.append("".join(parts))

    status = sheet.take_notice() or _focus_error(sheet, cur_row, cur_col) or ""
    lines.append(status[:LINE_WIDTH].ljust(LINE_WIDTH))
    return lines
