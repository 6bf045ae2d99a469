"""vicissicalc - a small grid calculator with a coordinate formula language.

Usage::

    from vicissicalc import Sheet, load_sheet, save_sheet

    sheet = load_sheet("budget.vc")
    sheet.set_text(0, 1, "=r@0 * 2")    # twice the value in column 0
    print(sheet.get_value(0, 1))
    save_sheet(sheet, "budget.vc")

Formulas start with ``=`` and use ``+ - * / % ^``, parentheses, ``r`` and
``c`` (the evaluating cell's own row and column) and ``row@col`` to read
another cell.
"""

from vicissicalc._cell import Cell
from vicissicalc._fileio import load_sheet, read_sheet, save_sheet
from vicissicalc._render import View, render
from vicissicalc._sheet import NCOLS, NROWS, Sheet
from vicissicalc.calc import CalcError, ErrorKind, evaluate_formula

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CalcError",
    "Cell",
    "ErrorKind",
    "NCOLS",
    "NROWS",
    "Sheet",
    "View",
    "evaluate_formula",
    "load_sheet",
    "read_sheet",
    "render",
    "save_sheet",
]
