# yeargrid/config.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .interaction import DragValidator, ResizeValidator
from .validate import (
    PRECISION_DAY,
    ConfigurationError,
    check_month_indices,
    check_page_size,
    normalize_precision,
    validate_config,
)

DEFAULT_PAGE_SIZE = 4

ViewConfigDict = Dict[str, Any]


@dataclass(frozen=True)
class ViewConfig:
    """Year-view options.

    page_size: months per page (paged/carousel display).
    precision: "day" or "minute".
    year_end_months: 0-based month indices flagged as year-end columns.
    validate_drag / validate_resize: optional predicates gating candidate geometry.
    """

    page_size: int = DEFAULT_PAGE_SIZE
    precision: str = PRECISION_DAY
    year_end_months: Tuple[int, ...] = ()
    validate_drag: Optional[DragValidator] = None
    validate_resize: Optional[ResizeValidator] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "page_size", check_page_size(self.page_size))
        object.__setattr__(self, "precision", normalize_precision(self.precision))
        object.__setattr__(self, "year_end_months", tuple(sorted(check_month_indices(self.year_end_months))))
        for name in ("validate_drag", "validate_resize"):
            fn = getattr(self, name)
            if fn is not None and not callable(fn):
                raise ConfigurationError(f"{name} must be callable when provided")

    @classmethod
    def from_mapping(cls, cfg: ViewConfigDict) -> "ViewConfig":
        """Build from a plain dict (e.g. loaded JSON). Missing keys take defaults."""
        errs = validate_config(cfg)
        if errs:
            raise ConfigurationError("Invalid config:\n" + "\n".join(f"  - {e}" for e in errs))

        year_ends = cfg.get("year_end_months")
        return cls(
            page_size=cfg.get("page_size", DEFAULT_PAGE_SIZE),
            precision=cfg.get("precision", PRECISION_DAY),
            year_end_months=tuple(year_ends or ()),
            validate_drag=cfg.get("validate_drag"),
            validate_resize=cfg.get("validate_resize"),
        )

    def to_dict(self) -> ViewConfigDict:
        return {
            "page_size": self.page_size,
            "precision": self.precision,
            "year_end_months": list(self.year_end_months),
        }
