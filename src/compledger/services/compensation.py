"""Replace-employee-compensation-state operation used by the salary UI.

The service loads the employee snapshot, computes the new ledger with the
pure core, writes the whole result back in one replace call and renders the
history. Concurrent edits to the same employee are last-writer-wins: the
second full-array replacement discards the first.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from compledger.core.config import AppSettings
from compledger.core.exceptions import PersistenceError, ValidationError
from compledger.core.protocols import IEmployeeStore
from compledger.core.types import Ledger
from compledger.ledger import store
from compledger.ledger.classifier import classify, classify_read
from compledger.ledger.history import build_view
from compledger.ledger.totals import aggregate_total, check_monthly_salary
from compledger.models.edits import EditKind, EditMode, EditResult
from compledger.models.employee import CompensationPayload, EmployeeSnapshot
from compledger.models.ledger_entry import ProposedRevision, is_consistent, parse_revision
from compledger.models.view import HistoryView

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def materialized_ledger(
    snapshot: EmployeeSnapshot, effective_at: datetime, *, for_edit: bool = False
) -> Ledger:
    """Stored history, or the legacy entry it implies when there is none.

    With ``for_edit`` the legacy entry never starts after ``effective_at``.
    """
    day = effective_at.date()
    op = classify_read(
        snapshot.salary_history, snapshot, day, effective_at, not_after=day if for_edit else None,
    )
    if op is None:
        return snapshot.salary_history
    return store.apply(snapshot.salary_history, op)


def plan_edit(
    snapshot: EmployeeSnapshot,
    mode: EditMode,
    revision: ProposedRevision | None,
    position: int | None,
    effective_at: datetime,
) -> tuple[EditKind, CompensationPayload]:
    """Compute the replacement payload for an edit. Pure."""
    ledger = snapshot.salary_history
    if mode in (EditMode.EDIT_CURRENT, EditMode.ADD_NEW):
        if revision is None:
            raise ValidationError.for_field("basic", "Number is required")
        op = classify(ledger, snapshot, revision, mode, effective_at.date(), effective_at)
        logger.info("Employee %s: %s (%s)", snapshot.employee_id, op.kind, op.reason)
        kind, new_ledger = op.kind, store.apply(ledger, op)
    else:
        if position is None:
            raise ValidationError.for_field("position", "Number is required")
        ledger = materialized_ledger(snapshot, effective_at, for_edit=True)
        if mode is EditMode.EDIT_HISTORICAL:
            if revision is None:
                raise ValidationError.for_field("basic", "Number is required")
            kind, new_ledger = EditKind.EDIT_HISTORICAL, store.edit_historical(ledger, position, revision)
        else:
            kind, new_ledger = EditKind.DELETE_HISTORICAL, store.delete(ledger, position)
        logger.info("Employee %s: %s at position %d", snapshot.employee_id, kind, position)

    basic, other_allowance, pointer = store.current_values(new_ledger, snapshot)
    payload = CompensationPayload(
        basic=basic,
        other_allowance=other_allowance,
        salary_history=new_ledger,
        current_revision_id=pointer,
    )
    return kind, payload


class CompensationService:
    """Salary history operations for one backing store.

    Dependencies are injected at construction time; ``clock`` supplies the
    effective timestamp of every edit.
    """

    def __init__(
        self,
        *,
        settings: AppSettings,
        employee_store: IEmployeeStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._settings = settings
        self._store = employee_store
        self._clock = clock or _utcnow

    @property
    def page_size(self) -> int:
        return self._settings.ledger.page_size

    def _load(self, employee_id: str) -> EmployeeSnapshot:
        snapshot = self._store.load(employee_id)
        if not is_consistent(snapshot.salary_history):
            logger.warning(
                "Employee %s: stored salary history has overlapping or multiple open revisions",
                employee_id,
            )
        return snapshot

    def view(self, employee_id: str, page: int = 1) -> HistoryView:
        """Render history; legacy pay is shown but not written."""
        snapshot = self._load(employee_id)
        ledger = materialized_ledger(snapshot, self._clock())
        return build_view(ledger, page, self.page_size)

    def submit(
        self,
        employee_id: str,
        mode: EditMode | str,
        data: Mapping[str, Any] | None = None,
        position: int | None = None,
        page: int = 1,
    ) -> EditResult:
        """Validate, apply and persist one edit."""
        try:
            mode = EditMode(mode)
        except ValueError:
            raise ValidationError.for_field("mode", "Please select a valid action") from None
        revision = None
        if mode is not EditMode.DELETE_HISTORICAL:
            revision = parse_revision(data or {})

        snapshot = self._load(employee_id)
        kind, payload = plan_edit(snapshot, mode, revision, position, self._clock())

        try:
            self._store.replace_compensation(employee_id, payload)
        except PersistenceError as exc:
            logger.warning("Employee %s: saving salary history failed: %s", employee_id, exc)
            raise
        except Exception as exc:
            logger.warning("Employee %s: saving salary history failed: %s", employee_id, exc)
            raise PersistenceError(str(exc)) from exc

        return EditResult(
            kind=kind,
            payload=payload,
            view=build_view(payload.salary_history, page, self.page_size),
        )

    def package(self, employee_id: str, monthly_salary: Any = None) -> dict[str, Any]:
        """Aggregate monthly package, optionally checked against a declared amount."""
        snapshot = self._load(employee_id)
        currency = self._settings.ledger.currency
        if monthly_salary is not None:
            check_monthly_salary(monthly_salary, snapshot, currency)
        return {"total": aggregate_total(snapshot), "currency": currency}
