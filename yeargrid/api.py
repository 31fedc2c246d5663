"""yeargrid.api

Stable *library* entrypoint for yeargrid.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from yeargrid.config import ViewConfig
from yeargrid.interaction import InteractionSessionManager, column_width, round_half_away_from_zero
from yeargrid.io import events_from_json, layout_to_dict, load_events
from yeargrid.layout import column_for, layout, position_event
from yeargrid.model import (
    DateChange,
    DragCandidate,
    Event,
    EventResizable,
    EventRow,
    MonthCell,
    Page,
    PositionedEvent,
    ResizeCandidate,
)
from yeargrid.months import build_year
from yeargrid.pages import get_page, page_count, partition
from yeargrid.validate import (
    ConfigurationError,
    EventValidationError,
    InvalidStateError,
    validate_config,
    validate_events,
)
from yeargrid.view import YearView


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
# Prefer append-only unless you are intentionally reshaping the public surface.
_PUBLIC_EXPORTS = (
    "ConfigurationError",
    "DateChange",
    "DragCandidate",
    "Event",
    "EventResizable",
    "EventRow",
    "EventValidationError",
    "InteractionSessionManager",
    "InvalidStateError",
    "MonthCell",
    "Page",
    "PositionedEvent",
    "ResizeCandidate",
    "ViewConfig",
    "YearView",
    "build_year",
    "column_for",
    "column_width",
    "events_from_json",
    "get_page",
    "layout",
    "layout_to_dict",
    "load_events",
    "page_count",
    "partition",
    "position_event",
    "round_half_away_from_zero",
    "validate_config",
    "validate_events",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
