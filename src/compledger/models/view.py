"""Salary history view models returned to the UI."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from compledger.models.ledger_entry import LedgerEntry


class HistoryRow(BaseModel):
    """A ledger entry at its position in the sorted history."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    position: int
    entry: LedgerEntry


class HistoryView(BaseModel):
    """Sorted salary history plus the rows of the requested page."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    rows: list[HistoryRow]
    total_pages: int
    page: int
    current_page_rows: list[HistoryRow]
