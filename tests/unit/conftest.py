"""Shared builders for ledger unit tests."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from compledger.models.employee import EmployeeSnapshot
from compledger.models.ledger_entry import LedgerEntry, Month


@pytest.fixture
def make_entry():
    def _make(
        from_date: date,
        to_date: date | None = None,
        basic: str = "5000",
        other: str = "500",
        revision_id: int = 0,
        is_initial: bool = False,
    ) -> LedgerEntry:
        return LedgerEntry(
            revision_id=revision_id,
            month=Month.of(from_date),
            from_date=from_date,
            to_date=to_date,
            basic=Decimal(basic),
            other_allowance=Decimal(other),
            created_at=datetime.combine(from_date, datetime.min.time(), tzinfo=timezone.utc),
            is_initial=is_initial,
        )

    return _make


@pytest.fixture
def legacy_employee() -> EmployeeSnapshot:
    """Employee created before salary history was tracked."""
    return EmployeeSnapshot(
        employee_id="EMP-1001",
        basic=Decimal("5000"),
        other_allowance=Decimal("500"),
        date_of_joining=date(2023, 3, 15),
        created_at=datetime(2023, 3, 16, 9, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
def three_entry_ledger(make_entry) -> tuple[LedgerEntry, ...]:
    """Closed, closed, open; stored in insertion order."""
    return (
        make_entry(date(2023, 3, 1), date(2025, 1, 10), "5000", "500", revision_id=1, is_initial=True),
        make_entry(date(2025, 1, 10), date(2025, 2, 1), "6000", "500", revision_id=2, is_initial=True),
        make_entry(date(2025, 2, 1), None, "6200", "600", revision_id=3),
    )
