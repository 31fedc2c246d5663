# yeargrid/pages.py
from __future__ import annotations

from typing import List, Sequence

from .model import MonthCell, Page
from .validate import check_page_size


def page_count(page_size: int, total: int = 12) -> int:
    size = check_page_size(page_size)
    return -(-int(total) // size)


def partition(months: Sequence[MonthCell], page_size: int) -> List[Page]:
    """Slice the month columns into consecutive pages of at most `page_size` cells.

    The last page holds the remainder. Concatenating the pages reproduces `months`.
    """
    size = check_page_size(page_size)
    cells = list(months)
    return [
        Page(index=i, months=tuple(cells[start:start + size]))
        for i, start in enumerate(range(0, len(cells), size))
    ]


def get_page(pages: Sequence[Page], index: int) -> Page:
    """Page at `index`; raises IndexError outside [0, len(pages))."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"page index must be an int; got {type(index).__name__}")
    if index < 0 or index >= len(pages):
        raise IndexError(f"page index out of range: {index} (pages={len(pages)})")
    return pages[index]


def page_range(pages: Sequence[Page]) -> range:
    return range(len(pages))


def page_of_month(pages: Sequence[Page], month_index: int) -> int:
    """Index of the page holding the given 0-based month."""
    for page in pages:
        for cell in page.months:
            if cell.month_index == month_index:
                return page.index
    raise IndexError(f"month index not on any page: {month_index}")
