"""Type aliases used across the compensation ledger."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from compledger.models.ledger_entry import LedgerEntry

Position = int  # zero-based index into the history sorted by fromDate desc
StorageIndex = int  # index into the ledger in insertion order
Ledger = tuple["LedgerEntry", ...]
