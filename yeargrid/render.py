# yeargrid/render.py
from __future__ import annotations

import calendar
from typing import List, Sequence

from .model import EventRow, MonthCell, PositionedEvent

DEFAULT_CELL_CHARS = 8


def _header_label(cell: MonthCell) -> str:
    label = calendar.month_abbr[cell.date.month]
    if cell.is_current:
        label += "*"
    if cell.is_year_end:
        label += "|"
    return label


def _bar(pe: PositionedEvent, width: int) -> str:
    # Open ends mark events continuing beyond the grid.
    left = "<" if pe.starts_before_grid else "["
    right = ">" if pe.ends_after_grid else "]"
    inner = max(0, width - 2)
    title = (pe.event.title or str(pe.event.id))[:inner]
    return left + title.ljust(inner, "=") + right


def render_text(grid: Sequence[MonthCell], rows: Sequence[EventRow], *, cell_chars: int = DEFAULT_CELL_CHARS) -> str:
    """Plain-text preview: one header line, then one line per event row."""
    w = max(3, int(cell_chars))
    lines: List[str] = ["".join(_header_label(c).center(w) for c in grid).rstrip()]
    for row in rows:
        buf = [" "] * (w * len(grid))
        for pe in row.row:
            bar = _bar(pe, pe.span * w - 1)
            start = pe.offset * w
            buf[start:start + len(bar)] = list(bar)
        lines.append("".join(buf).rstrip())
    return "\n".join(lines) + "\n"
