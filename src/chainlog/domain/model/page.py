"""Pagination primitives shared by every list query."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from chainlog.domain.exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One window of a larger result.

    ``has_more`` is true exactly when ``offset + len(items) < total_count``.
    """

    items: list[T] = field(default_factory=list)
    total_count: int = 0
    has_more: bool = False

    @staticmethod
    def build(items: list[T], offset: int, total_count: int) -> Page[T]:
        return Page(
            items=items,
            total_count=total_count,
            has_more=offset + len(items) < total_count,
        )


def check_window(offset: int, limit: int) -> None:
    if offset < 0:
        raise ValidationError(f"offset must be >= 0, got {offset}", field="offset")
    if limit < 0:
        raise ValidationError(f"limit must be >= 0, got {limit}", field="limit")


def window(total: int, offset: int, limit: int) -> range:
    """Zero-based positions of the requested window, clipped to *total*."""
    if offset >= total:
        return range(0)
    return range(offset, min(offset + limit, total))


def slice_page(items: Sequence[T], offset: int, limit: int) -> tuple[list[T], int]:
    """Return the window of *items* plus the total it was cut from."""
    total = len(items)
    return [items[i] for i in window(total, offset, limit)], total
