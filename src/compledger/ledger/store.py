"""Pure ledger transformations.

Every function takes a ledger (any sequence of entries, in insertion order)
and returns a new tuple. Inputs are never mutated; a failure raises before
anything is returned, so callers keep their original ledger untouched.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from compledger.core.exceptions import NotFoundError
from compledger.core.types import Ledger, Position
from compledger.ledger.classifier import ClassifiedEdit, new_revision_entry
from compledger.ledger.history import resolve_position
from compledger.models.edits import EditKind
from compledger.models.employee import EmployeeSnapshot
from compledger.models.ledger_entry import LedgerEntry, ProposedRevision


def apply(ledger: Sequence[LedgerEntry], op: ClassifiedEdit) -> Ledger:
    """Carry out a classified edit: materialize, close, append."""
    entries = list(ledger)
    if op.seed is not None:
        entries.append(op.seed)
    if op.kind is EditKind.POPULATE_FROM_LEGACY:
        return tuple(entries)

    if op.target_index is not None:
        if not 0 <= op.target_index < len(entries) or not entries[op.target_index].is_open:
            raise NotFoundError(op.target_index, len(entries))
        entries[op.target_index] = entries[op.target_index].closed_at(op.effective_date)

    entries.append(new_revision_entry(op, entries))
    return tuple(entries)


def edit_historical(
    ledger: Sequence[LedgerEntry], position: Position, revision: ProposedRevision
) -> Ledger:
    """Correct the amounts of the entry shown at ``position``; dates stay."""
    index = resolve_position(ledger, position)
    entries = list(ledger)
    entries[index] = entries[index].revised(revision)
    return tuple(entries)


def delete(ledger: Sequence[LedgerEntry], position: Position) -> Ledger:
    """Drop the entry shown at ``position``. Coverage gaps are left as-is."""
    index = resolve_position(ledger, position)
    return tuple(entry for i, entry in enumerate(ledger) if i != index)


def current_values(
    ledger: Sequence[LedgerEntry], employee: EmployeeSnapshot
) -> tuple[Decimal, Decimal, int | None]:
    """Basic, other allowance and revision pointer for the employee record.

    Taken from the open entry when there is one; otherwise the employee keeps
    its existing pay and loses the pointer.
    """
    open_ = [(entry.from_date, i) for i, entry in enumerate(ledger) if entry.is_open]
    if not open_:
        return employee.basic, employee.other_allowance, None
    latest = ledger[max(open_)[1]]
    return latest.basic, latest.other_allowance, latest.revision_id or None
