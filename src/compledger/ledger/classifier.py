"""Classify a salary edit against an employee's existing history.

Three outcomes:

- populate-from-legacy: the employee predates salary history and has pay on
  the employee record only. A synthetic open entry is materialized from that
  pay. On the read path this is display-only; in front of an edit it is
  carried as ``seed`` so the legacy rate is kept as closed history.
- correct-open-revision: "edit current salary". The open revision is closed
  at the effective date and a new initial revision starts on it, so the old
  rate stays queryable for the period it was in force.
- append-new-revision: "add salary record", and the fallback whenever no
  open revision matches a correction.

Nothing here reads a clock: the effective date is always passed in.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Sequence

from compledger.models.edits import EditKind, EditMode
from compledger.models.employee import EmployeeSnapshot
from compledger.models.ledger_entry import LedgerEntry, Month, ProposedRevision, next_revision_id


@dataclass(frozen=True)
class ClassifiedEdit:
    """A classified ledger operation, ready for ``store.apply``."""

    kind: EditKind
    reason: str
    effective_date: date
    recorded_at: datetime
    revision: ProposedRevision | None = None
    target_index: int | None = None  # storage index (seed included) of the entry to close
    seed: LedgerEntry | None = None

    @property
    def closes_entry(self) -> bool:
        return self.target_index is not None


def _default_recorded_at(effective_date: date) -> datetime:
    return datetime.combine(effective_date, time.min, tzinfo=timezone.utc)


def legacy_anchor(employee: EmployeeSnapshot, effective_date: date) -> date:
    """First day of the month the legacy pay is assumed to start from."""
    if employee.date_of_joining is not None:
        start = employee.date_of_joining
    elif employee.created_at is not None:
        start = employee.created_at.date()
    else:
        start = effective_date
    return start.replace(day=1)


def legacy_entry(
    employee: EmployeeSnapshot,
    effective_date: date,
    recorded_at: datetime | None = None,
    *,
    not_after: date | None = None,
) -> LedgerEntry | None:
    """Synthetic open entry for pay that was never versioned, if any.

    ``not_after`` caps the start date. Edits pass their effective date so a
    joiner whose start month is still ahead can be closed on it.
    """
    if not employee.has_legacy_pay:
        return None
    from_date = legacy_anchor(employee, effective_date)
    if not_after is not None and from_date > not_after:
        from_date = not_after
    return LedgerEntry(
        revision_id=1,
        month=Month.of(from_date),
        from_date=from_date,
        to_date=None,
        basic=employee.basic,
        other_allowance=employee.other_allowance,
        created_at=employee.created_at or recorded_at or _default_recorded_at(effective_date),
        is_initial=True,
    )


def _most_recent(ledger: Sequence[LedgerEntry], indices: list[int]) -> int | None:
    """Latest fromDate wins; among equal dates the later insertion wins."""
    if not indices:
        return None
    return max(indices, key=lambda i: (ledger[i].from_date, i))


def find_open_index(ledger: Sequence[LedgerEntry]) -> int | None:
    return _most_recent(ledger, [i for i, entry in enumerate(ledger) if entry.is_open])


def find_correction_target(
    ledger: Sequence[LedgerEntry], employee: EmployeeSnapshot
) -> tuple[int | None, str]:
    """Locate the open revision that "edit current salary" should supersede.

    The revision pointer on the employee record is authoritative. Without a
    usable pointer, open entries whose amounts equal the employee's current
    pay (or that are flagged initial) qualify, most recent first.
    """
    pointer = employee.current_revision_id
    if pointer:
        for i, entry in enumerate(ledger):
            if entry.revision_id == pointer and entry.is_open:
                return i, f"open revision {pointer} referenced by the employee record"

    candidates = [
        i for i, entry in enumerate(ledger)
        if entry.is_open and (
            entry.is_initial
            or (entry.basic == employee.basic and entry.other_allowance == employee.other_allowance)
        )
    ]
    index = _most_recent(ledger, candidates)
    if index is None:
        return None, "no open revision matches the employee's current pay"
    return index, "open revision matching the employee's current pay"


def classify_read(
    ledger: Sequence[LedgerEntry],
    employee: EmployeeSnapshot,
    effective_date: date,
    recorded_at: datetime | None = None,
    *,
    not_after: date | None = None,
) -> ClassifiedEdit | None:
    """Populate-from-legacy for display, or None when history needs nothing."""
    if ledger:
        return None
    seed = legacy_entry(employee, effective_date, recorded_at, not_after=not_after)
    if seed is None:
        return None
    return ClassifiedEdit(
        kind=EditKind.POPULATE_FROM_LEGACY,
        reason="employee has current pay but no salary history",
        effective_date=effective_date,
        recorded_at=recorded_at or _default_recorded_at(effective_date),
        seed=seed,
    )


def classify(
    ledger: Sequence[LedgerEntry],
    employee: EmployeeSnapshot,
    revision: ProposedRevision,
    mode: EditMode,
    effective_date: date,
    recorded_at: datetime | None = None,
) -> ClassifiedEdit:
    """Decide how ``revision`` submitted in ``mode`` changes the ledger."""
    if mode not in (EditMode.EDIT_CURRENT, EditMode.ADD_NEW):
        raise ValueError(f"classify() handles current/new edits only, got {mode!r}")
    recorded_at = recorded_at or _default_recorded_at(effective_date)

    working: list[LedgerEntry] = list(ledger)
    seed = None if working else legacy_entry(
        employee, effective_date, recorded_at, not_after=effective_date,
    )
    if seed is not None:
        working.append(seed)
    prefix = "legacy pay materialized; " if seed is not None else ""

    if mode is EditMode.EDIT_CURRENT:
        target, why = find_correction_target(working, employee)
        if target is not None:
            return ClassifiedEdit(
                kind=EditKind.CORRECT_OPEN_REVISION,
                reason=prefix + why,
                effective_date=effective_date,
                recorded_at=recorded_at,
                revision=revision,
                target_index=target,
                seed=seed,
            )
        prefix += f"{why}; "

    target = find_open_index(working)
    if target is None:
        why = "no open revision to close"
    else:
        why = f"closing open revision {working[target].revision_id}"
    return ClassifiedEdit(
        kind=EditKind.APPEND_NEW_REVISION,
        reason=prefix + why,
        effective_date=effective_date,
        recorded_at=recorded_at,
        revision=revision,
        target_index=target,
        seed=seed,
    )


def new_revision_entry(op: ClassifiedEdit, ledger: Sequence[LedgerEntry]) -> LedgerEntry:
    """The open entry an edit appends to ``ledger`` (seed already included)."""
    if op.revision is None:
        raise ValueError(f"{op.kind} carries no revision")
    return LedgerEntry(
        revision_id=next_revision_id(ledger),
        month=op.revision.month_for(op.effective_date),
        from_date=op.effective_date,
        to_date=None,
        basic=op.revision.basic,
        other_allowance=op.revision.other_allowance,
        created_at=op.recorded_at,
        is_initial=op.kind is EditKind.CORRECT_OPEN_REVISION,
    )
