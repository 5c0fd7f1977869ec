"""Shared test doubles: re-export memory backends."""

from __future__ import annotations

from compledger.persistence.memory_backend import MemoryEmployeeStore, MemorySnapshotCache

__all__ = ["MemoryEmployeeStore", "MemorySnapshotCache"]
