"""Page arithmetic shared by the listing queries."""

from __future__ import annotations

import math
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Sequence

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


def normalize_page(page_number: int, page_size: int) -> tuple[int, int]:
    """Clamp a requested page into range instead of rejecting it.

    Page numbers start at 0; sizes are held between 1 and MAX_PAGE_SIZE.
    """
    return max(page_number, 0), min(max(page_size, 1), MAX_PAGE_SIZE)


def page_of(items: Sequence[T], page_number: int, page_size: int) -> list[T]:
    """Items on the given page; empty past the last page."""
    start = page_number * page_size
    return list(items[start : start + page_size])


def count_pages(total_count: int, page_size: int) -> int:
    return math.ceil(total_count / page_size)
