"""In-memory backends for unit tests and local development."""

from __future__ import annotations

from compledger.core.exceptions import EmployeeNotFoundError, PersistenceError
from compledger.models.employee import CompensationPayload, EmployeeSnapshot


class MemoryEmployeeStore:
    """Dict-backed IEmployeeStore."""

    def __init__(self) -> None:
        self._employees: dict[str, EmployeeSnapshot] = {}
        self._fail_next: str | None = None
        self.writes: list[tuple[str, CompensationPayload]] = []

    def put(self, snapshot: EmployeeSnapshot) -> None:
        """Create or overwrite an employee (the profile form's job in production)."""
        self._employees[snapshot.employee_id] = snapshot

    def fail_next_write(self, reason: str = "") -> None:
        """Make the next replace_compensation raise PersistenceError."""
        self._fail_next = reason

    def load(self, employee_id: str) -> EmployeeSnapshot:
        try:
            return self._employees[employee_id]
        except KeyError:
            raise EmployeeNotFoundError(employee_id) from None

    def replace_compensation(self, employee_id: str, payload: CompensationPayload) -> None:
        if self._fail_next is not None:
            reason, self._fail_next = self._fail_next, None
            raise PersistenceError(reason or None)
        current = self.load(employee_id)
        self._employees[employee_id] = current.model_copy(update={
            "basic": payload.basic,
            "other_allowance": payload.other_allowance,
            "salary_history": payload.salary_history,
            "current_revision_id": payload.current_revision_id,
        })
        self.writes.append((employee_id, payload))


class MemorySnapshotCache:
    """Dict-backed ISnapshotCache."""

    def __init__(self) -> None:
        self._store: dict[str, EmployeeSnapshot] = {}

    def get(self, employee_id: str) -> EmployeeSnapshot | None:
        return self._store.get(employee_id)

    def put(self, snapshot: EmployeeSnapshot) -> None:
        self._store[snapshot.employee_id] = snapshot

    def invalidate(self, employee_id: str) -> None:
        self._store.pop(employee_id, None)
