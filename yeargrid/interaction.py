"""Drag / resize session engine.

Converts horizontal pixel deltas into whole-day date changes. One session per
event (keyed by `Event.id`); resize and drag may run concurrently for different
events, but no drag may start while any resize is open.

Protocol:
  resize: begin_resize -> update_resize* -> end_resize | abort
  drag:   begin_drag -> update_drag* -> end_drag | abort

Ending or updating a session that does not exist raises InvalidStateError so a
completed gesture always yields exactly one DateChange.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Tuple, Union

from .model import (
    EDGE_LEFT,
    DateChange,
    DragCandidate,
    DragSession,
    Event,
    ResizeCandidate,
    ResizeSession,
)
from .util.dates import add_days
from .validate import ConfigurationError, InvalidStateError, check_column_width, check_edge

logger = logging.getLogger(__name__)

DragValidator = Callable[[DragCandidate], bool]
ResizeValidator = Callable[[ResizeCandidate], bool]
EventKey = Union[Event, Hashable]


def round_half_away_from_zero(x: float) -> int:
    if x >= 0:
        return int(math.floor(x + 0.5))
    return -int(math.floor(-x + 0.5))


def column_width(container_width: float, grid_length: int) -> int:
    """Pixel width of one month column: floor(container_width / grid_length)."""
    if isinstance(grid_length, bool) or not isinstance(grid_length, int) or grid_length <= 0:
        raise ConfigurationError(f"grid length must be a positive int; got {grid_length!r}")
    if isinstance(container_width, bool) or not isinstance(container_width, (int, float)) or container_width < 0:
        raise ConfigurationError(f"container width must be a non-negative number; got {container_width!r}")
    return int(math.floor(container_width / grid_length))


def _key(event: EventKey) -> Hashable:
    return event.id if isinstance(event, Event) else event


def _check_geometry(offset: int, span: int, grid_length: Optional[int] = None) -> None:
    if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
        raise ConfigurationError(f"offset must be a non-negative int; got {offset!r}")
    if isinstance(span, bool) or not isinstance(span, int) or span < 1:
        raise ConfigurationError(f"span must be an int >= 1; got {span!r}")
    if grid_length is None:
        return
    if isinstance(grid_length, bool) or not isinstance(grid_length, int) or grid_length <= 0:
        raise ConfigurationError(f"grid length must be a positive int; got {grid_length!r}")
    if offset + span > grid_length:
        raise ConfigurationError(f"offset {offset} + span {span} exceeds grid length {grid_length}")


class InteractionSessionManager:
    def __init__(
        self,
        *,
        validate_drag: Optional[DragValidator] = None,
        validate_resize: Optional[ResizeValidator] = None,
    ) -> None:
        self.validate_drag = validate_drag
        self.validate_resize = validate_resize
        self._resizes: Dict[Hashable, ResizeSession] = {}
        self._drags: Dict[Hashable, DragSession] = {}

    # --- state queries --------------------------------------------------

    @property
    def resize_active(self) -> bool:
        return bool(self._resizes)

    def has_session(self, event: EventKey) -> bool:
        k = _key(event)
        return k in self._resizes or k in self._drags

    def is_resizing(self, event: EventKey) -> bool:
        return _key(event) in self._resizes

    def is_dragging(self, event: EventKey) -> bool:
        return _key(event) in self._drags

    def _ensure_idle(self, k: Hashable) -> None:
        if k in self._resizes or k in self._drags:
            raise InvalidStateError(f"event {k!r} already has an open drag/resize session")

    def _resize(self, event: Event, action: str) -> ResizeSession:
        s = self._resizes.get(_key(event))
        if s is None:
            raise InvalidStateError(f"cannot {action} resize: no open resize session for event {_key(event)!r}")
        return s

    def _drag(self, event: Event, action: str) -> DragSession:
        s = self._drags.get(_key(event))
        if s is None:
            raise InvalidStateError(f"cannot {action} drag: no open drag session for event {_key(event)!r}")
        return s

    # --- resize ---------------------------------------------------------

    def begin_resize(
        self,
        event: Event,
        edge: str,
        offset: int,
        span: int,
        column_width: Optional[float] = None,
        grid_length: Optional[int] = None,
    ) -> None:
        k = _key(event)
        self._ensure_idle(k)
        edge = check_edge(edge)
        _check_geometry(offset, span, grid_length)
        width = check_column_width(column_width) if column_width is not None else None

        self._resizes[k] = ResizeSession(
            event_id=k,
            edge=edge,
            original_offset=offset,
            original_span=span,
            offset=offset,
            span=span,
            column_width=width,
            grid_length=grid_length,
        )
        logger.debug("resize start: event=%r edge=%s offset=%d span=%d", k, edge, offset, span)

    def update_resize(
        self,
        event: Event,
        pixel_delta: float,
        column_width: Optional[float] = None,
    ) -> Tuple[int, int]:
        """Returns the tentative (offset, span) for live feedback.

        A candidate keeps the previous tentative geometry when its span drops
        below 1, when it leaves the grid (offset < 0, or past grid_length when
        known), or when validate_resize rejects it.
        """
        s = self._resize(event, "update")
        width = column_width if column_width is not None else s.column_width
        if width is None:
            raise ConfigurationError("column width is required to update a resize")
        s.column_width = check_column_width(width)

        diff = round_half_away_from_zero(float(pixel_delta) / s.column_width)
        if s.edge == EDGE_LEFT:
            offset = s.original_offset + diff
            span = s.original_span - diff
        else:
            offset = s.original_offset
            span = s.original_span + diff

        if self._within_grid(s, offset, span) and self._resize_allowed(event, s.edge, offset, span, pixel_delta):
            s.offset, s.span = offset, span
        return s.offset, s.span

    @staticmethod
    def _within_grid(s: ResizeSession, offset: int, span: int) -> bool:
        if span < 1 or offset < 0:
            return False
        return s.grid_length is None or offset + span <= s.grid_length

    def _resize_allowed(self, event: Event, edge: str, offset: int, span: int, pixel_delta: float) -> bool:
        if self.validate_resize is None:
            return True
        cand = ResizeCandidate(event=event, edge=edge, offset=offset, span=span, pixel_delta=float(pixel_delta))
        return bool(self.validate_resize(cand))

    def end_resize(self, event: Event) -> DateChange:
        s = self._resize(event, "end")
        if s.edge == EDGE_LEFT:
            days_diff = s.offset - s.original_offset
        else:
            days_diff = s.span - s.original_span

        new_start = event.start
        new_end = event.end
        if s.edge == EDGE_LEFT:
            new_start = add_days(new_start, days_diff)
        elif new_end is not None:
            new_end = add_days(new_end, days_diff)

        del self._resizes[s.event_id]
        logger.debug("resize end: event=%r edge=%s days=%d", s.event_id, s.edge, days_diff)
        return DateChange(new_start=new_start, new_end=new_end, event=event)

    # --- drag -----------------------------------------------------------

    def begin_drag(self, event: Event, column_width: Optional[float] = None) -> None:
        k = _key(event)
        if self._resizes:
            raise InvalidStateError(f"cannot start drag for event {k!r} while a resize is in progress")
        self._ensure_idle(k)
        width = check_column_width(column_width) if column_width is not None else None
        self._drags[k] = DragSession(event_id=k, column_width=width)
        logger.debug("drag start: event=%r", k)

    def validate_drag_move(self, event: Event, dx: float, dy: float = 0.0) -> bool:
        if self._resizes:
            return False
        if self.validate_drag is None:
            return True
        return bool(self.validate_drag(DragCandidate(event=event, dx=float(dx), dy=float(dy))))

    def update_drag(self, event: Event, dx: float, dy: float = 0.0) -> bool:
        """Visual-only move; records the displacement when it is allowed."""
        s = self._drag(event, "update")
        ok = self.validate_drag_move(event, dx, dy)
        if ok:
            s.dx, s.dy = float(dx), float(dy)
        return ok

    def end_drag(
        self,
        event: Event,
        pixel_displacement: Optional[float] = None,
        column_width: Optional[float] = None,
    ) -> DateChange:
        """Commit the drag. Without `pixel_displacement` the last dx accepted by
        update_drag is used."""
        s = self._drag(event, "end")
        if pixel_displacement is None:
            pixel_displacement = s.dx
        width = column_width if column_width is not None else s.column_width
        if width is None:
            raise ConfigurationError("column width is required to end a drag")
        width = check_column_width(width)

        days = round_half_away_from_zero(float(pixel_displacement) / width)
        new_start = add_days(event.start, days)
        new_end = add_days(event.end, days) if event.end is not None else None

        del self._drags[s.event_id]
        logger.debug("drag end: event=%r days=%d", s.event_id, days)
        return DateChange(new_start=new_start, new_end=new_end, event=event)

    # --- cancellation ---------------------------------------------------

    def abort(self, event: EventKey) -> bool:
        """Discard any session for `event` without a DateChange; True if one existed."""
        k = _key(event)
        found = self._resizes.pop(k, None) is not None
        found = (self._drags.pop(k, None) is not None) or found
        if found:
            logger.debug("session aborted: event=%r", k)
        return found

    def prune(self, live_ids: Iterable[Hashable]) -> List[Hashable]:
        """Abort sessions whose event id is not in `live_ids`."""
        live = set(live_ids)
        stale = [k for k in list(self._resizes) + list(self._drags) if k not in live]
        for k in stale:
            self.abort(k)
        return stale

    def reset(self) -> None:
        self._resizes.clear()
        self._drags.clear()
