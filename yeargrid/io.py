"""Event / layout JSON helpers."""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .model import DateChange, Event, EventResizable, EventRow, MonthCell, Page

JsonDict = Dict[str, Any]


def _parse_when(v: Any, label: str) -> Optional[dt.datetime]:
    if v is None:
        return None
    if not isinstance(v, str) or not v.strip():
        raise ValueError(f"{label} must be an ISO date/datetime string")
    try:
        return dt.datetime.fromisoformat(v.strip())
    except ValueError as ex:
        raise ValueError(f"{label} is not a valid ISO date/datetime: {v!r}") from ex


def _as_bool(v: Any, label: str) -> bool:
    if v is None:
        return False
    if not isinstance(v, bool):
        raise ValueError(f"{label} must be a boolean")
    return v


def event_from_dict(raw: Any, *, index: int = 0) -> Event:
    label = f"events[{index}]"
    if not isinstance(raw, dict):
        raise ValueError(f"{label} must be an object")

    ev_id = raw.get("id")
    if ev_id is None or isinstance(ev_id, (bool, dict, list)) or (isinstance(ev_id, str) and not ev_id.strip()):
        raise ValueError(f"{label}.id must be a non-empty string or int")

    start = _parse_when(raw.get("start"), f"{label}.start")
    if start is None:
        raise ValueError(f"{label} must include start")
    end = _parse_when(raw.get("end"), f"{label}.end")

    rz = raw.get("resizable") or {}
    if not isinstance(rz, dict):
        raise ValueError(f"{label}.resizable must be an object")

    meta = raw.get("meta") or {}
    if not isinstance(meta, dict):
        raise ValueError(f"{label}.meta must be an object")

    css = raw.get("css_class")
    if css is not None and not isinstance(css, str):
        raise ValueError(f"{label}.css_class must be a string")

    return Event(
        id=ev_id,
        start=start,
        end=end,
        title=str(raw.get("title") or ""),
        draggable=_as_bool(raw.get("draggable"), f"{label}.draggable"),
        resizable=EventResizable(
            before_start=_as_bool(rz.get("before_start"), f"{label}.resizable.before_start"),
            after_end=_as_bool(rz.get("after_end"), f"{label}.resizable.after_end"),
        ),
        css_class=css,
        meta=dict(meta),
    )


def events_from_json(obj: Any) -> List[Event]:
    """Accepts a list of event objects or {"events": [...]}."""
    if isinstance(obj, dict):
        obj = obj.get("events")
    if not isinstance(obj, list):
        raise ValueError("events JSON must be a list or an object with an 'events' list")
    return [event_from_dict(raw, index=i) for i, raw in enumerate(obj)]


def load_events(path: Path) -> List[Event]:
    obj = json.loads(Path(path).read_text(encoding="utf-8", errors="replace"))
    return events_from_json(obj)


def _iso(v: Optional[dt.date]) -> Optional[str]:
    return v.isoformat() if v is not None else None


def event_to_dict(ev: Event) -> JsonDict:
    out: JsonDict = {
        "id": ev.id,
        "start": _iso(ev.start),
        "end": _iso(ev.end),
        "title": ev.title,
        "draggable": ev.draggable,
        "resizable": {
            "before_start": ev.resizable.before_start,
            "after_end": ev.resizable.after_end,
        },
    }
    if ev.css_class is not None:
        out["css_class"] = ev.css_class
    if ev.meta:
        out["meta"] = dict(ev.meta)
    return out


def month_to_dict(cell: MonthCell) -> JsonDict:
    return {
        "date": cell.date.isoformat(),
        "is_past": cell.is_past,
        "is_current": cell.is_current,
        "is_future": cell.is_future,
        "is_year_end": cell.is_year_end,
        "css_class": cell.css_class,
    }


def layout_to_dict(grid: Sequence[MonthCell], rows: Sequence[EventRow], *, page: Optional[Page] = None) -> JsonDict:
    return {
        "page": page.index if page is not None else None,
        "months": [month_to_dict(c) for c in grid],
        "rows": [
            [
                {
                    "event": event_to_dict(pe.event),
                    "offset": pe.offset,
                    "span": pe.span,
                    "starts_before_grid": pe.starts_before_grid,
                    "ends_after_grid": pe.ends_after_grid,
                }
                for pe in row.row
            ]
            for row in rows
        ],
    }


def date_change_to_dict(change: DateChange) -> JsonDict:
    return {
        "id": change.event.id,
        "new_start": _iso(change.new_start),
        "new_end": _iso(change.new_end),
    }
