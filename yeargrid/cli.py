from __future__ import annotations

import argparse
import datetime as dt
import json
import logging
import os
import sys
from pathlib import Path

from .config import ViewConfig
from .io import layout_to_dict, load_events
from .render import render_text
from .util.console import warn
from .util.timeparse import parse_date_yyyy_mm_dd, parse_month_list
from .validate import ConfigurationError, EventValidationError
from .view import YearView

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(
        description="Lay out calendar events as bars across a year grid of month columns."
    )
    ap.add_argument("--events", required=True, help="Events JSON file (list, or object with an 'events' list)")
    ap.add_argument("--year", type=int, default=None, help="Year to lay out (default: year of --now)")
    ap.add_argument("--now", default=None, help="Reference date YYYY-MM-DD for past/current/future (default: today)")
    ap.add_argument(
        "--page-size",
        type=int,
        default=os.getenv("YEARGRID_PAGE_SIZE", "4"),
        help="Months per page (default: env YEARGRID_PAGE_SIZE or 4)",
    )
    ap.add_argument("--page", type=int, default=None, help="Lay out only this page index (default: whole year)")
    ap.add_argument(
        "--precision",
        default=os.getenv("YEARGRID_PRECISION", "day"),
        help="day | minute (default: env YEARGRID_PRECISION or 'day')",
    )
    ap.add_argument("--year-end", default="", help="Comma-separated 0-based year-end month indices, e.g. 11")
    ap.add_argument("--format", choices=("text", "json"), default="text", help="Output format (default: text)")
    ap.add_argument("--out", default=None, help="Output path (default: stdout)")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.now:
        try:
            now = parse_date_yyyy_mm_dd(args.now)
        except ValueError as e:
            raise SystemExit(f"Invalid --now value: {e}")
    else:
        now = dt.date.today()
    year = args.year if args.year is not None else now.year

    try:
        year_ends = parse_month_list(args.year_end)
    except ValueError as e:
        raise SystemExit(f"Invalid --year-end value: {e}")

    try:
        cfg = ViewConfig(page_size=args.page_size, precision=args.precision, year_end_months=year_ends)
    except ConfigurationError as e:
        raise SystemExit(f"Invalid configuration: {e}")

    try:
        events = load_events(Path(args.events))
    except (OSError, ValueError) as e:
        raise SystemExit(f"Failed to load events: {e}")

    try:
        view = YearView(year, now, events, config=cfg)
    except EventValidationError as e:
        raise SystemExit(str(e))
    except ConfigurationError as e:
        raise SystemExit(f"Invalid configuration: {e}")

    page = None
    if args.page is not None:
        try:
            page = view.page(args.page)
        except IndexError as e:
            raise SystemExit(f"Invalid --page value: {e}")

    grid = view.grid(page.index if page is not None else None)
    rows = view.rows(page.index if page is not None else None)
    logger.debug("laid out %d rows for year %d", len(rows), year)
    if not rows:
        warn("no events fall inside the selected grid")

    if args.format == "json":
        text = json.dumps(layout_to_dict(grid, rows, page=page), indent=2, default=str) + "\n"
    else:
        text = render_text(grid, rows)

    if not args.out:
        sys.stdout.write(text)
        return

    out_path = Path(args.out).resolve()
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise SystemExit(f"Cannot write output '{out_path}': {e}")
    print(out_path)


if __name__ == "__main__":
    main()
