# yeargrid/view.py
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import replace
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from .config import ViewConfig
from .interaction import InteractionSessionManager, column_width
from .layout import layout
from .model import EDGE_LEFT, DateChange, Event, EventRow, MonthCell, Page, PositionedEvent
from .months import build_year
from .pages import get_page, page_of_month, partition
from .util.dates import as_datetime
from .validate import InvalidStateError, assert_valid_events, check_edge, check_month_indices, check_year

logger = logging.getLogger(__name__)

BeforeRender = Callable[[List[MonthCell]], None]


class YearView:
    """Stateful year view: month header, pages, event rows and gestures.

    The header (months/pages) is rebuilt when the year or year-end months
    change; rows are recomputed on demand from the current event set.
    """

    def __init__(
        self,
        year: int,
        now: dt.date,
        events: Iterable[Event] = (),
        config: Optional[ViewConfig] = None,
        before_render: Optional[BeforeRender] = None,
    ) -> None:
        self.config = config or ViewConfig()
        self.now = now
        self.before_render = before_render
        self.sessions = InteractionSessionManager(
            validate_drag=self.config.validate_drag,
            validate_resize=self.config.validate_resize,
        )
        self._year = check_year(year)
        self._year_end_months = frozenset(self.config.year_end_months)
        self._resize_origin: Dict[Hashable, Tuple[int, int]] = {}
        self.events: List[Event] = []
        self.months: List[MonthCell] = []
        self.pages: List[Page] = []
        self.refresh_header()
        self.set_events(events)

    # --- header ---------------------------------------------------------

    @property
    def year(self) -> int:
        return self._year

    def set_year(self, year: int) -> None:
        self._year = check_year(year)
        self.refresh_header()

    def set_year_end_months(self, indices: Iterable[int]) -> None:
        self._year_end_months = check_month_indices(indices)
        self.refresh_header()

    def refresh_header(self) -> None:
        self.months = build_year(self._year, self.now, self._year_end_months)
        self.pages = partition(self.months, self.config.page_size)
        if self.before_render is not None:
            self.before_render(self.months)
        logger.debug("header refreshed: year=%d pages=%d", self._year, len(self.pages))

    # --- pages ----------------------------------------------------------

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def page(self, index: int) -> Page:
        return get_page(self.pages, index)

    def current_page_index(self) -> int:
        """Page holding the current month, or 0 when `now` is in another year."""
        if self.now.year != self._year:
            return 0
        return page_of_month(self.pages, self.now.month - 1)

    def grid(self, page_index: Optional[int] = None) -> List[MonthCell]:
        if page_index is None:
            return list(self.months)
        return list(self.page(page_index).months)

    # --- body -----------------------------------------------------------

    def set_events(self, events: Iterable[Event]) -> None:
        """Replace the event set; open sessions of removed events are discarded."""
        evs = list(events)
        assert_valid_events(evs)
        self.events = evs
        for k in self.sessions.prune(ev.id for ev in evs):
            self._resize_origin.pop(k, None)

    def rows(self, page_index: Optional[int] = None) -> List[EventRow]:
        return layout(self.events, self.grid(page_index), self.config.precision)

    def apply_change(self, change: DateChange) -> Event:
        """Commit a DateChange to the in-memory event set; returns the updated event."""
        updated = replace(change.event, start=change.new_start, end=change.new_end)
        for i, ev in enumerate(self.events):
            if ev.id == updated.id:
                self.events[i] = updated
                return updated
        raise KeyError(f"unknown event id: {updated.id!r}")

    # --- gestures -------------------------------------------------------

    def column_width(self, container_width: float, grid: Sequence[MonthCell]) -> int:
        return column_width(container_width, len(grid))

    def resize_started(
        self,
        positioned: PositionedEvent,
        edge: str,
        container_width: float,
        grid: Sequence[MonthCell],
    ) -> None:
        edge = check_edge(edge)
        rz = positioned.event.resizable
        if not (rz.before_start if edge == EDGE_LEFT else rz.after_end):
            raise InvalidStateError(f"event {positioned.event.id!r} is not resizable on its {edge} edge")
        self.sessions.begin_resize(
            positioned.event,
            edge,
            positioned.offset,
            positioned.span,
            column_width=self.column_width(container_width, grid),
            grid_length=len(grid),
        )
        self._resize_origin[positioned.event.id] = (positioned.offset, positioned.span)

    def resizing(self, positioned: PositionedEvent, pixel_delta: float) -> None:
        positioned.offset, positioned.span = self.sessions.update_resize(positioned.event, pixel_delta)

    def resize_ended(self, positioned: PositionedEvent) -> DateChange:
        change = self.sessions.end_resize(positioned.event)
        positioned.offset, positioned.span = self._resize_origin.pop(positioned.event.id)
        return change

    def can_drag(self, positioned: PositionedEvent) -> bool:
        return bool(positioned.event.draggable) and not self.sessions.resize_active

    def drag_started(self, positioned: PositionedEvent, container_width: float, grid: Sequence[MonthCell]) -> None:
        if not positioned.event.draggable:
            raise InvalidStateError(f"event {positioned.event.id!r} is not draggable")
        self.sessions.begin_drag(positioned.event, column_width=self.column_width(container_width, grid))

    def dragging(self, positioned: PositionedEvent, dx: float, dy: float = 0.0) -> bool:
        return self.sessions.update_drag(positioned.event, dx, dy)

    def drag_ended(self, positioned: PositionedEvent, dx: Optional[float] = None) -> DateChange:
        return self.sessions.end_drag(positioned.event, dx)

    def abort(self, event: Event) -> bool:
        self._resize_origin.pop(event.id, None)
        return self.sessions.abort(event)

    # --- header drop target ---------------------------------------------

    def header_drag_enter(self, cell: MonthCell) -> None:
        cell.drag_over = True

    def header_drag_leave(self, cell: MonthCell) -> None:
        cell.drag_over = False

    def header_drop(self, cell: MonthCell, event: Event) -> DateChange:
        """Drop an event on a month header: it moves to the first of that month.

        Time of day and duration are kept. Any open session for the event is
        closed by the drop.
        """
        cell.drag_over = False
        self.abort(event)

        if isinstance(event.start, dt.datetime):
            start = event.start
            new_start = start.replace(year=cell.year, month=cell.date.month, day=1)
        else:
            start = as_datetime(event.start)
            new_start = cell.date
        delta = as_datetime(new_start, start.tzinfo) - start
        new_end = event.end + delta if event.end is not None else None
        logger.debug("header drop: event=%r -> %s", event.id, cell.date.isoformat())
        return DateChange(new_start=new_start, new_end=new_end, event=event)
