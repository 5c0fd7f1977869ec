"""Re-export persistence protocols from core for convenience."""

from __future__ import annotations

from compledger.core.protocols import IEmployeeStore, ISnapshotCache

__all__ = ["IEmployeeStore", "ISnapshotCache"]
