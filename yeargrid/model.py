# yeargrid/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Tuple

EDGE_LEFT = "left"
EDGE_RIGHT = "right"


@dataclass(frozen=True)
class EventResizable:
    before_start: bool = False
    after_end: bool = False


@dataclass(frozen=True)
class Event:
    """Calendar event placed on the year grid.

    `id` is the stable key used by interaction sessions; it must be unique
    within one event set. A plain `date` start/end is read as midnight.
    """

    id: Hashable
    start: dt.datetime
    end: Optional[dt.datetime] = None
    title: str = ""
    draggable: bool = False
    resizable: EventResizable = field(default_factory=EventResizable)
    css_class: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass
class MonthCell:
    """One month column of the year grid."""

    date: dt.date
    is_past: bool
    is_current: bool
    is_future: bool
    is_year_end: bool = False
    css_class: Optional[str] = None
    drag_over: bool = False

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month_index(self) -> int:
        return self.date.month - 1


@dataclass(frozen=True)
class Page:
    index: int
    months: Tuple[MonthCell, ...]

    def __len__(self) -> int:
        return len(self.months)

    def __iter__(self):
        return iter(self.months)


@dataclass
class PositionedEvent:
    event: Event
    offset: int
    span: int
    starts_before_grid: bool = False
    ends_after_grid: bool = False


@dataclass
class EventRow:
    row: List[PositionedEvent] = field(default_factory=list)

    def fits(self, offset: int, span: int) -> bool:
        end = offset + span
        for pe in self.row:
            if offset < pe.offset + pe.span and pe.offset < end:
                return False
        return True


@dataclass
class ResizeSession:
    event_id: Hashable
    edge: str
    original_offset: int
    original_span: int
    offset: int
    span: int
    column_width: Optional[float] = None
    grid_length: Optional[int] = None


@dataclass
class DragSession:
    event_id: Hashable
    column_width: Optional[float] = None
    dx: float = 0.0
    dy: float = 0.0


@dataclass(frozen=True)
class ResizeCandidate:
    """Geometry offered to a `validate_resize` predicate."""

    event: Event
    edge: str
    offset: int
    span: int
    pixel_delta: float


@dataclass(frozen=True)
class DragCandidate:
    """Displacement offered to a `validate_drag` predicate."""

    event: Event
    dx: float
    dy: float


@dataclass(frozen=True)
class DateChange:
    new_start: dt.datetime
    new_end: Optional[dt.datetime]
    event: Event


__all__ = [
    "EDGE_LEFT",
    "EDGE_RIGHT",
    "DateChange",
    "DragCandidate",
    "DragSession",
    "Event",
    "EventResizable",
    "EventRow",
    "MonthCell",
    "Page",
    "PositionedEvent",
    "ResizeCandidate",
    "ResizeSession",
]
