"""Tests for the vicissicalc Sheet (cell store, edits, notices)."""

from __future__ import annotations

import pytest

from vicissicalc import NCOLS, NROWS, Cell, Sheet
from vicissicalc.calc._engine import CellState
from vicissicalc.calc._errors import CalcError


class TestGrid:
    def test_default_dimensions(self) -> None:
        sheet = Sheet()
        assert sheet.dimensions == (NROWS, NCOLS) == (20, 4)

    def test_every_cell_present_and_empty(self) -> None:
        sheet = Sheet(3, 2)
        cells = list(sheet.iter_cells())
        assert len(cells) == 6
        assert all(isinstance(c, Cell) and c.text == "" for c in cells)
        assert [(c.row, c.col) for c in cells][:3] == [(0, 0), (0, 1), (1, 0)]

    def test_iter_rows(self) -> None:
        rows = list(Sheet(3, 2).iter_rows())
        assert len(rows) == 3
        assert all(len(r) == 2 for r in rows)

    @pytest.mark.parametrize("nrows,ncols", [(0, 4), (20, 0), (-1, 1)])
    def test_bad_dimensions(self, nrows: int, ncols: int) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            Sheet(nrows, ncols)

    def test_in_range(self) -> None:
        sheet = Sheet(2, 2)
        assert sheet.in_range(1, 1)
        assert not sheet.in_range(2, 0)
        assert not sheet.in_range(0, -1)

    def test_cell_out_of_range_raises(self) -> None:
        with pytest.raises(IndexError):
            Sheet().cell(20, 0)
        with pytest.raises(IndexError):
            Sheet().set_text(0, 4, "x")

    def test_getitem(self) -> None:
        sheet = Sheet()
        sheet.set_text(2, 1, "abc")
        assert sheet[2, 1].text == "abc"


class TestEdits:
    def test_set_text(self) -> None:
        sheet = Sheet()
        sheet.set_text(0, 0, "=1+1")
        assert sheet.text(0, 0) == "=1+1"
        assert sheet[0, 0].formula == "1+1"

    def test_set_text_only_defers_invalidation(self) -> None:
        sheet = Sheet()
        sheet.set_text(0, 0, "=1")
        assert sheet.get_value(0, 0) == 1.0
        sheet.set_text_only(0, 0, "=2")
        assert sheet.get_value(0, 0) == 1.0
        sheet.text_updated()
        assert sheet.get_value(0, 0) == 2.0

    @pytest.mark.parametrize("text", ["a\nb", "=1\r+2", "trailing\n"])
    def test_line_breaks_rejected(self, text: str) -> None:
        sheet = Sheet()
        with pytest.raises(ValueError, match="single line"):
            sheet.set_text(0, 0, text)
        assert sheet.text(0, 0) == ""

    def test_copy_text(self) -> None:
        sheet = Sheet()
        sheet.set_text(0, 0, "=r*10")
        sheet.copy_text(0, 0, 3, 0)
        assert sheet.text(3, 0) == "=r*10"
        assert sheet.get_value(3, 0) == 30.0

    def test_copy_invalidates(self) -> None:
        sheet = Sheet()
        sheet.set_text(0, 0, "=1")
        sheet.set_text(1, 0, "=0@0")
        sheet.get_value(1, 0)
        sheet.copy_text(1, 0, 1, 1)
        assert sheet[1, 0].state is CellState.STALE

    def test_cell_helpers(self) -> None:
        cell = Cell(0, 0, "   ")
        assert cell.is_blank
        assert cell.formula is None
        assert "STALE" in repr(cell)


class TestEvaluate:
    def test_evaluate_reads_sheet(self) -> None:
        sheet = Sheet()
        sheet.set_text(1, 1, "=21")
        assert sheet.evaluate("=1@1 * 2", 0, 0) == 42.0

    def test_evaluate_uses_given_position(self) -> None:
        assert Sheet().evaluate("=r+c", 3, 2) == 5.0

    def test_evaluate_nesting_too_deep(self) -> None:
        formula = "=" + "(" * 5000 + "1" + ")" * 5000
        assert Sheet().evaluate(formula, 0, 0) is CalcError.DEPTH


class TestNotices:
    def test_error_posts_notice(self) -> None:
        sheet = Sheet()
        sheet.set_text(0, 0, "=1/0")
        sheet.get_value(0, 0)
        assert sheet.notice == "Divide by 0"

    def test_first_notice_wins(self) -> None:
        sheet = Sheet()
        sheet.notify("first")
        sheet.notify("second")
        assert sheet.take_notice() == "first"

    def test_take_clears(self) -> None:
        sheet = Sheet()
        sheet.notify("hello")
        sheet.take_notice()
        assert sheet.take_notice() is None

    def test_cached_error_does_not_repost(self) -> None:
        sheet = Sheet()
        sheet.set_text(0, 0, "=1/0")
        sheet.get_value(0, 0)
        sheet.take_notice()
        assert sheet.get_value(0, 0) is CalcError.DIVIDE_BY_ZERO
        assert sheet.notice is None

    def test_successful_value_posts_nothing(self) -> None:
        sheet = Sheet()
        sheet.set_text(0, 0, "=1")
        sheet.get_value(0, 0)
        assert sheet.notice is None
