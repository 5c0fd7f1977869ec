"""Sorted, paginated salary history.

The UI lists history most recent first and addresses rows by their position
in that sorted list. Ledgers are stored in insertion order, so every
position has to be translated back to a storage index before mutating.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from compledger.core.exceptions import NotFoundError, ValidationError
from compledger.core.types import Position, StorageIndex
from compledger.models.ledger_entry import LedgerEntry
from compledger.models.view import HistoryRow, HistoryView

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    total_pages: int


def sorted_indices(ledger: Sequence[LedgerEntry]) -> list[StorageIndex]:
    """Storage indices ordered by fromDate descending, ties in insertion order."""
    return sorted(range(len(ledger)), key=lambda i: ledger[i].from_date, reverse=True)


def sort_history(ledger: Sequence[LedgerEntry]) -> list[LedgerEntry]:
    return [ledger[i] for i in sorted_indices(ledger)]


def resolve_position(ledger: Sequence[LedgerEntry], position: Position) -> StorageIndex:
    """Storage index of the entry displayed at a sorted-view position."""
    order = sorted_indices(ledger)
    if not 0 <= position < len(order):
        raise NotFoundError(position, len(order))
    return order[position]


def total_pages(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValidationError.for_field("pageSize", "Number must be at least 1")
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, pages: int) -> int:
    return min(max(page, 1), pages)


def position_for(page: int, row: int, page_size: int) -> Position:
    """Sorted-view position of ``row`` (zero-based) on a 1-based ``page``."""
    return (page - 1) * page_size + row


def paginate(entries: Sequence[T], page: int, page_size: int) -> Page[T]:
    pages = total_pages(len(entries), page_size)
    page = clamp_page(page, pages)
    start = position_for(page, 0, page_size)
    return Page(items=list(entries[start:start + page_size]), page=page, total_pages=pages)


def build_view(ledger: Sequence[LedgerEntry], page: int, page_size: int) -> HistoryView:
    rows = [HistoryRow(position=pos, entry=entry) for pos, entry in enumerate(sort_history(ledger))]
    current = paginate(rows, page, page_size)
    return HistoryView(
        rows=rows,
        total_pages=current.total_pages,
        page=current.page,
        current_page_rows=current.items,
    )
