"""Error taxonomy and validation helpers (library-facing)."""

from __future__ import annotations

import datetime as dt
from typing import Any, Iterable, List, Sequence

from yeargrid.model import EDGE_LEFT, EDGE_RIGHT, Event
from yeargrid.util.dates import as_datetime

MIN_YEAR = dt.MINYEAR
MAX_YEAR = dt.MAXYEAR

PRECISION_DAY = "day"
PRECISION_MINUTE = "minute"

_PRECISION_ALIASES = {
    "day": PRECISION_DAY,
    "days": PRECISION_DAY,
    "minute": PRECISION_MINUTE,
    "minutes": PRECISION_MINUTE,
}


class ConfigurationError(ValueError):
    """Raised for invalid caller-supplied configuration (page size, month index, ...)."""


class InvalidStateError(RuntimeError):
    """Raised when the drag/resize session protocol is violated."""


class EventValidationError(ValueError):
    """Raised when an event set fails validation."""


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def check_year(year: Any) -> int:
    if not _is_int(year) or not (MIN_YEAR <= year <= MAX_YEAR):
        raise ConfigurationError(f"year must be an int in [{MIN_YEAR}, {MAX_YEAR}]; got {year!r}")
    return int(year)


def check_month_index(idx: Any) -> int:
    if not _is_int(idx) or not (0 <= idx <= 11):
        raise ConfigurationError(f"month index must be an int in [0, 11]; got {idx!r}")
    return int(idx)


def check_month_indices(indices: Iterable[Any] | None) -> frozenset[int]:
    if indices is None:
        return frozenset()
    return frozenset(check_month_index(i) for i in indices)


def check_page_size(page_size: Any) -> int:
    if not _is_int(page_size) or page_size <= 0:
        raise ConfigurationError(f"page_size must be a positive int; got {page_size!r}")
    return int(page_size)


def check_column_width(width: Any) -> float:
    if isinstance(width, bool) or not isinstance(width, (int, float)) or not width > 0:
        raise ConfigurationError(f"column width must be a positive number; got {width!r}")
    return float(width)


def check_edge(edge: Any) -> str:
    if edge not in (EDGE_LEFT, EDGE_RIGHT):
        raise ConfigurationError(f"resize edge must be 'left' or 'right'; got {edge!r}")
    return str(edge)


def normalize_precision(precision: Any) -> str:
    """Canonical precision name.

    Accepts "day"/"days" and "minute"/"minutes" (case-insensitive).
    """
    key = str(precision).strip().lower() if isinstance(precision, str) else None
    if key not in _PRECISION_ALIASES:
        raise ConfigurationError(f"precision must be 'day' or 'minute'; got {precision!r}")
    return _PRECISION_ALIASES[key]


def _validate_one(i: int, ev: Any) -> List[str]:
    errs: List[str] = []
    label = f"events[{i}]"
    if not isinstance(ev, Event):
        return [f"{label} must be an Event; got {type(ev).__name__}"]
    if ev.id is None:
        errs.append(f"{label}.id must not be None")
    if not isinstance(ev.start, dt.date):
        errs.append(f"{label}.start must be a date or datetime")
        return errs
    if ev.end is not None:
        if not isinstance(ev.end, dt.date):
            errs.append(f"{label}.end must be a date or datetime when provided")
            return errs
        try:
            start = as_datetime(ev.start)
            if as_datetime(ev.end, start.tzinfo) < start:
                errs.append(f"{label} ends before it starts ({ev.end.isoformat()} < {ev.start.isoformat()})")
        except TypeError:
            errs.append(f"{label}.start and end must both be naive or both be aware")
    return errs


def validate_event(ev: Any, *, index: int = 0) -> List[str]:
    return _validate_one(index, ev)


def validate_events(events: Sequence[Any]) -> List[str]:
    """Return a list of human-readable problems; empty means valid."""
    errs: List[str] = []
    seen: set = set()
    for i, ev in enumerate(events):
        errs.extend(_validate_one(i, ev))
        if isinstance(ev, Event):
            try:
                if ev.id in seen:
                    errs.append(f"events[{i}].id is not unique: {ev.id!r}")
                seen.add(ev.id)
            except TypeError:
                errs.append(f"events[{i}].id must be hashable")
    return errs


CONFIG_KEYS = ("page_size", "precision", "year_end_months", "validate_drag", "validate_resize")


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def validate_config(cfg: Any) -> List[str]:
    """Check a plain config mapping (as loaded from JSON). Missing keys are fine."""
    if not isinstance(cfg, dict):
        return [f"config must be dict; got {type(cfg).__name__}"]
    errs: List[str] = []

    unknown = sorted(str(k) for k in cfg if k not in CONFIG_KEYS)
    _require(not unknown, f"config has unknown keys: {', '.join(unknown)}", errs)

    if "page_size" in cfg:
        ps = cfg["page_size"]
        _require(_is_int(ps) and ps > 0, f"config.page_size must be a positive int; got {ps!r}", errs)
    if "precision" in cfg:
        p = cfg["precision"]
        _require(
            isinstance(p, str) and p.strip().lower() in _PRECISION_ALIASES,
            f"config.precision must be 'day' or 'minute'; got {p!r}",
            errs,
        )
    if cfg.get("year_end_months") is not None:
        ye = cfg["year_end_months"]
        if not isinstance(ye, (list, tuple)):
            errs.append("config.year_end_months must be a list of month indices")
        else:
            for i, m in enumerate(ye):
                _require(_is_int(m) and 0 <= m <= 11, f"config.year_end_months[{i}] must be an int in [0, 11]", errs)
    for name in ("validate_drag", "validate_resize"):
        fn = cfg.get(name)
        _require(fn is None or callable(fn), f"config.{name} must be callable when provided", errs)
    return errs


def assert_valid_events(events: Sequence[Any]) -> None:
    errs = validate_events(events)
    if errs:
        raise EventValidationError("Invalid events:\n" + "\n".join(f"  - {e}" for e in errs))


__all__ = [
    "CONFIG_KEYS",
    "ConfigurationError",
    "EventValidationError",
    "InvalidStateError",
    "PRECISION_DAY",
    "PRECISION_MINUTE",
    "assert_valid_events",
    "check_column_width",
    "check_edge",
    "check_month_index",
    "check_month_indices",
    "check_page_size",
    "check_year",
    "normalize_precision",
    "validate_config",
    "validate_event",
    "validate_events",
]
