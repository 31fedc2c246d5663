# yeargrid/layout.py
from __future__ import annotations

import datetime as dt
import logging
from typing import Hashable, Iterable, List, Optional, Sequence, Tuple

from .model import Event, EventRow, MonthCell, PositionedEvent
from .util.dates import (
    as_datetime,
    month_ordinal,
    month_start,
    next_day_start,
    next_month_start,
    start_of_day,
)
from .validate import PRECISION_DAY, ConfigurationError, normalize_precision, validate_event

logger = logging.getLogger(__name__)

_TICK = dt.timedelta(microseconds=1)


def _check_grid(grid: Sequence[MonthCell]) -> int:
    """Return the month ordinal of the first column; grid must be contiguous."""
    if not grid:
        raise ConfigurationError("grid must contain at least one month")
    first = month_ordinal(grid[0].date)
    for i, cell in enumerate(grid):
        if month_ordinal(cell.date) != first + i:
            raise ConfigurationError(
                f"grid must be contiguous ascending months; column {i} is {cell.date.isoformat()}"
            )
    return first


def _effective_interval(ev: Event, precision: str) -> Tuple[dt.datetime, Optional[dt.datetime]]:
    """
    Returns (start, end_exclusive) after precision rounding.
    end_exclusive is None for instant events (no end, or end == start in minute mode).
    """
    start = as_datetime(ev.start)
    end = as_datetime(ev.end, start.tzinfo) if ev.end is not None else None

    if precision == PRECISION_DAY:
        return start_of_day(start), next_day_start(end if end is not None else start)

    if end is None or end <= start:
        return start, None
    return start, end


def column_for(grid: Sequence[MonthCell], when: dt.date) -> int:
    """Index of the grid column containing `when`; IndexError when outside the grid."""
    first = _check_grid(grid)
    idx = month_ordinal(when) - first
    if idx < 0 or idx >= len(grid):
        raise IndexError(f"{when.isoformat()} is outside the grid ({grid[0].date.isoformat()} +{len(grid)} months)")
    return idx


def position_event(ev: Event, grid: Sequence[MonthCell], precision: str = PRECISION_DAY) -> Optional[PositionedEvent]:
    """Place one event on the grid; None when it lies wholly outside."""
    prec = normalize_precision(precision)
    first = _check_grid(grid)

    start, end = _effective_interval(ev, prec)
    tz = start.tzinfo
    grid_start = month_start(grid[0].date.year, grid[0].date.month, tz)
    grid_end = next_month_start(grid[-1].date, tz)

    last = start if end is None else end - _TICK
    if last < grid_start or start >= grid_end:
        return None

    first_col = month_ordinal(max(start, grid_start)) - first
    last_col = month_ordinal(min(last, grid_end - _TICK)) - first

    return PositionedEvent(
        event=ev,
        offset=first_col,
        span=max(1, last_col - first_col + 1),
        starts_before_grid=start < grid_start,
        ends_after_grid=end is not None and end > grid_end,
    )


def _place(rows: List[EventRow], pe: PositionedEvent) -> None:
    for row in rows:
        if row.fits(pe.offset, pe.span):
            row.row.append(pe)
            return
    rows.append(EventRow(row=[pe]))


def layout(
    events: Iterable[Event],
    grid: Sequence[MonthCell],
    precision: str = PRECISION_DAY,
) -> List[EventRow]:
    """Lay out events as bars across the month columns of `grid`.

    Each event goes into the first row where its [offset, offset+span) interval
    is free; input order is kept. Events outside the grid are dropped, invalid
    ones are logged and skipped. Inputs are not mutated.
    """
    prec = normalize_precision(precision)
    _check_grid(grid)

    rows: List[EventRow] = []
    placed = 0
    for i, ev in enumerate(events):
        errs = validate_event(ev, index=i)
        if errs:
            logger.warning("skipping invalid event: %s", "; ".join(errs))
            continue
        pe = position_event(ev, grid, prec)
        if pe is None:
            continue
        _place(rows, pe)
        placed += 1

    logger.debug(
        "layout: %d events on %d rows over %d columns from %s",
        placed,
        len(rows),
        len(grid),
        grid[0].date.isoformat(),
    )
    return rows


def iter_positioned(rows: Iterable[EventRow]) -> Iterable[PositionedEvent]:
    for row in rows:
        yield from row.row


def find_positioned(rows: Iterable[EventRow], event_id: Hashable) -> Optional[PositionedEvent]:
    for pe in iter_positioned(rows):
        if pe.event.id == event_id:
            return pe
    return None
