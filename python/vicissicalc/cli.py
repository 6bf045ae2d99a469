"""Typer CLI: inspect and edit sheet files from the shell."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

import vicissicalc
from vicissicalc._fileio import load_sheet, save_sheet
from vicissicalc._render import View, cell_display, format_value, render
from vicissicalc._sheet import Sheet
from vicissicalc.calc import CalcError, evaluate_formula, find_formula

app = typer.Typer(
    name="vicissicalc",
    help="Grid calculator: cells hold text or formulas like '=0@1 * 2'.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(vicissicalc.__version__)
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version", "-V", help="Print version and exit.",
            callback=_version_callback, is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log recalculation and file I/O.")
    ] = False,
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


# Type aliases for common parameters
FileArg = Annotated[Path, typer.Argument(help="Sheet file, one 'row col text' line per cell.")]
RowArg = Annotated[int, typer.Argument(help="Zero-based row.")]
ColArg = Annotated[int, typer.Argument(help="Zero-based column.")]
RowOpt = Annotated[int, typer.Option("--row", "-r", help="Zero-based row.")]
ColOpt = Annotated[int, typer.Option("--col", "-c", help="Zero-based column.")]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_cell(sheet: Sheet, row: int, col: int) -> None:
    if not sheet.in_range(row, col):
        raise typer.BadParameter(
            f"cell ({row}, {col}) is outside the {sheet.nrows}x{sheet.ncols} grid"
        )


def _flush_notice(sheet: Sheet) -> None:
    notice = sheet.take_notice()
    if notice:
        typer.echo(notice, err=True)


def _emit(result: float | CalcError) -> None:
    if isinstance(result, CalcError):
        typer.echo(result.message, err=True)
        raise typer.Exit(1)
    typer.echo(format_value(result))


def _save(sheet: Sheet, file: Path) -> None:
    ok = save_sheet(sheet, file)
    notice = sheet.take_notice()
    if not ok:
        typer.echo(notice or f"Cannot write {file}", err=True)
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def show(
    file: FileArg,
    formulas: Annotated[bool, typer.Option("--formulas", "-f", help="Show formulas instead of values.")] = False,
    row: RowOpt = 0,
    col: ColOpt = 0,
) -> None:
    """Print the whole grid."""
    sheet = load_sheet(file)
    _check_cell(sheet, row, col)
    view = View.FORMULAS if formulas else View.VALUES
    for line in render(sheet, view, (row, col)):
        typer.echo(line.rstrip())


@app.command()
def get(file: FileArg, row: RowArg, col: ColArg) -> None:
    """Print one cell's value (its text, for a literal cell)."""
    sheet = load_sheet(file)
    _flush_notice(sheet)
    _check_cell(sheet, row, col)
    if sheet.cell(row, col).formula is None:
        typer.echo(sheet.text(row, col))
        return
    _emit(sheet.get_value(row, col))


@app.command("set")
def set_(
    file: FileArg,
    row: RowArg,
    col: ColArg,
    text: Annotated[str, typer.Argument(help="New cell text; start with '=' for a formula.")],
) -> None:
    """Change one cell, save the file and print what the cell now shows."""
    sheet = load_sheet(file)
    _flush_notice(sheet)
    _check_cell(sheet, row, col)
    if "\n" in text or "\r" in text:
        raise typer.BadParameter("cell text must be a single line", param_hint="TEXT")
    sheet.set_text(row, col, text)
    _save(sheet, file)
    shown, failed = cell_display(sheet, row, col)
    if failed:
        typer.echo(shown, err=True)
        raise typer.Exit(1)
    typer.echo(shown)


@app.command()
def copy(
    file: FileArg,
    src_row: RowArg,
    src_col: ColArg,
    dst_row: RowArg,
    dst_col: ColArg,
) -> None:
    """Copy one cell's text to another cell and save the file."""
    sheet = load_sheet(file)
    _flush_notice(sheet)
    _check_cell(sheet, src_row, src_col)
    _check_cell(sheet, dst_row, dst_col)
    sheet.copy_text(src_row, src_col, dst_row, dst_col)
    _save(sheet, file)


@app.command("eval")
def eval_(
    formula: Annotated[str, typer.Argument(help="Formula text, e.g. '=2^3^2'.")],
    row: RowOpt = 0,
    col: ColOpt = 0,
) -> None:
    """Evaluate a formula on its own, with no grid to refer to."""
    if find_formula(formula) is None:
        raise typer.BadParameter("a formula must start with '='", param_hint="FORMULA")
    _emit(evaluate_formula(formula, row, col))
