# yeargrid/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Tuple

_MONTH_LIST_RE = re.compile(r"^\s*\d{1,2}(\s*,\s*\d{1,2})*\s*$")


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s, "%Y-%m-%d").date()


def parse_month_list(s: str) -> Tuple[int, ...]:
    """Parse "11" or "2,5,11" into 0-based month indices (range is checked by callers)."""
    if s is None or not str(s).strip():
        return ()
    if not _MONTH_LIST_RE.match(s):
        raise ValueError(f"month list must be comma-separated integers like 2,11: {s!r}")
    return tuple(int(p) for p in s.split(","))
