# yeargrid/util/dates.py
from __future__ import annotations

import datetime as dt
from typing import Optional


def as_datetime(v: dt.date, tzinfo: Optional[dt.tzinfo] = None) -> dt.datetime:
    """Read a date as midnight; datetimes pass through unchanged."""
    if isinstance(v, dt.datetime):
        return v
    return dt.datetime(v.year, v.month, v.day, tzinfo=tzinfo)


def start_of_day(v: dt.datetime) -> dt.datetime:
    return v.replace(hour=0, minute=0, second=0, microsecond=0)


def next_day_start(v: dt.datetime) -> dt.datetime:
    day = start_of_day(v)
    # The last day of MAXYEAR has no successor; clamp like next_month_start.
    if day.date() == dt.date.max:
        return dt.datetime.max.replace(tzinfo=v.tzinfo)
    return day + dt.timedelta(days=1)


def month_start(year: int, month: int, tzinfo: Optional[dt.tzinfo] = None) -> dt.datetime:
    return dt.datetime(year, month, 1, tzinfo=tzinfo)


def next_month_start(d: dt.date, tzinfo: Optional[dt.tzinfo] = None) -> dt.datetime:
    # December of MAXYEAR has no successor; clamp to the last representable instant.
    if d.month == 12:
        if d.year == dt.MAXYEAR:
            return dt.datetime.max.replace(tzinfo=tzinfo)
        return dt.datetime(d.year + 1, 1, 1, tzinfo=tzinfo)
    return dt.datetime(d.year, d.month + 1, 1, tzinfo=tzinfo)


def month_ordinal(d: dt.date) -> int:
    """Months since year 0; consecutive months differ by exactly 1."""
    return d.year * 12 + (d.month - 1)


def add_days(v: dt.datetime, days: int) -> dt.datetime:
    """Shift by whole calendar days, keeping the time of day."""
    return v + dt.timedelta(days=int(days))
