# yeargrid/months.py
from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional

from .model import MonthCell
from .validate import check_month_indices, check_year


def build_year(
    year: int,
    now: dt.date,
    year_end_months: Optional[Iterable[int]] = None,
) -> List[MonthCell]:
    """
    Returns the 12 month columns of `year` in ascending order (index i == month i).

    Temporal flags compare (year, month) against (now.year, now.month); exactly one
    of is_past / is_current / is_future is set per cell.
    """
    y = check_year(year)
    year_ends = check_month_indices(year_end_months)
    if not isinstance(now, dt.date):
        raise TypeError(f"now must be a date or datetime; got {type(now).__name__}")

    now_key = (now.year, now.month)
    cells: List[MonthCell] = []
    for idx in range(12):
        key = (y, idx + 1)
        cells.append(
            MonthCell(
                date=dt.date(y, idx + 1, 1),
                is_past=key < now_key,
                is_current=key == now_key,
                is_future=key > now_key,
                is_year_end=idx in year_ends,
            )
        )
    return cells
