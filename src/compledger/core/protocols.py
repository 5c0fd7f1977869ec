"""Protocol interfaces for the compensation ledger's collaborators.

The ledger core is pure; everything that touches I/O sits behind these
Protocols. Structural typing, no inheritance required, easy to test with
isinstance().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from compledger.models.employee import CompensationPayload, EmployeeSnapshot


# ---------------------------------------------------------------------------
# Persistence: Employee Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IEmployeeStore(Protocol):
    """Backing store for employee compensation state.

    ``replace_compensation`` overwrites basic, otherAllowance, the whole
    salaryHistory array and the open-revision pointer in one call. There is
    no partial update and no version check: the last writer wins.
    """

    def load(self, employee_id: str) -> EmployeeSnapshot: ...

    def replace_compensation(self, employee_id: str, payload: CompensationPayload) -> None: ...


# ---------------------------------------------------------------------------
# Persistence: Snapshot Cache
# ---------------------------------------------------------------------------

@runtime_checkable
class ISnapshotCache(Protocol):
    """Read-through cache of employee snapshots."""

    def get(self, employee_id: str) -> EmployeeSnapshot | None: ...

    def put(self, snapshot: EmployeeSnapshot) -> None: ...

    def invalidate(self, employee_id: str) -> None: ...
