"""Line-based sheet files: one ``<row> <col> <text>`` line per non-blank cell."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from vicissicalc._sheet import Sheet

logger = logging.getLogger(__name__)

# Two unsigned integers, then the text (leading blanks dropped, never empty).
_LINE_RE = re.compile(r"\s*([0-9]+)\s+([0-9]+)(?![0-9])\s*(\S[^\n]*)\n?")


def parse_line(line: str) -> tuple[int, int, str] | None:
    """Split a file line into ``(row, col, text)``, or None if malformed."""
    m = _LINE_RE.fullmatch(line)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2)), m.group(3)


def format_line(row: int, col: int, text: str) -> str:
    return f"{row} {col} {text}\n"


def read_sheet(sheet: Sheet, filename: str | os.PathLike[str]) -> bool:
    """Load cell texts from *filename* into *sheet*.

    Problems are posted as sheet notices rather than raised: a missing file
    leaves the sheet as it is with the notice ``Fresh file``, and bad lines
    are skipped.  Returns True if the file was read.
    """
    path = Path(filename)
    try:
        with path.open(encoding="utf-8") as f:
            lines = f.readlines()
    except FileNotFoundError:
        logger.debug("No file at %s; starting fresh", path)
        sheet.notify("Fresh file")
        return False
    except OSError as e:
        sheet.notify(e.strerror or str(e))
        return False

    loaded = 0
    for lineno, line in enumerate(lines, start=1):
        parsed = parse_line(line)
        if parsed is None:
            logger.debug("%s:%d: bad line %r", path, lineno, line)
            sheet.notify("Bad line in file")
            continue
        row, col, text = parsed
        if not sheet.in_range(row, col):
            logger.debug("%s:%d: cell (%d, %d) out of range", path, lineno, row, col)
            sheet.notify("Row or column number out of range in file")
            continue
        sheet.set_text_only(row, col, text)
        loaded += 1
    sheet.text_updated()
    logger.debug("Loaded %d cells from %s", loaded, path)
    return True


def load_sheet(filename: str | os.PathLike[str]) -> Sheet:
    """Create a default-sized sheet and fill it from *filename*."""
    sheet = Sheet()
    read_sheet(sheet, filename)
    return sheet


def save_sheet(sheet: Sheet, filename: str | os.PathLike[str]) -> bool:
    """Overwrite *filename* with every non-blank cell of *sheet*.

    Posts ``File written`` on success, or the OS error message on failure.
    """
    path = Path(filename)
    lines = [
        format_line(cell.row, cell.col, cell.text)
        for cell in sheet.iter_cells()
        if not cell.is_blank
    ]
    try:
        with path.open("w", encoding="utf-8") as f:
            f.writelines(lines)
    except OSError as e:
        sheet.notify(e.strerror or str(e))
        return False
    logger.debug("Wrote %d cells to %s", len(lines), path)
    sheet.notify("File written")
    return True
