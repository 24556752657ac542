"""Pagination utilities."""

from dataclasses import dataclass
from typing import TypeVar, Generic, Sequence

T = TypeVar("T")


@dataclass
class PaginationResult(Generic[T]):
    """Result container for a page of an in-memory collection."""

    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Calculate total number of pages."""
        if self.total == 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size


def paginate(items: Sequence[T], page: int, page_size: int) -> PaginationResult[T]:
    """
    Slice a sequence into one page.

    Args:
        items: Full, already filtered and sorted sequence
        page: Current page number (1-indexed)
        page_size: Number of items per page

    Returns:
        PaginationResult holding the requested page
    """
    offset = (page - 1) * page_size
    return PaginationResult(
        items=list(items[offset:offset + page_size]),
        total=len(items),
        page=page,
        page_size=page_size,
    )
