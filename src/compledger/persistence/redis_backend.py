"""Redis snapshot cache implementing ISnapshotCache."""

from __future__ import annotations

import redis

from compledger.core.exceptions import CacheError
from compledger.models.employee import EmployeeSnapshot


class RedisSnapshotCache:
    """Production ISnapshotCache backed by Redis.

    Snapshots are stored as their camelCase JSON under
    ``compledger:employee:{employee_id}`` and expire after ``ttl`` seconds.
    """

    KEY_PREFIX = "compledger:employee:"

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0,
                 ttl: int = 300) -> None:
        self._host = host
        self._port = port
        self._db = db
        self._ttl = ttl
        self._client = redis.Redis(
            host=host, port=port, db=db, decode_responses=True,
        )

    def _key(self, employee_id: str) -> str:
        return f"{self.KEY_PREFIX}{employee_id}"

    def get(self, employee_id: str) -> EmployeeSnapshot | None:
        try:
            raw = self._client.get(self._key(employee_id))
        except Exception as exc:
            raise CacheError(f"Redis GET failed for employee={employee_id!r}: {exc}") from exc
        if raw is None:
            return None
        return EmployeeSnapshot.model_validate_json(raw)

    def put(self, snapshot: EmployeeSnapshot) -> None:
        try:
            self._client.setex(
                self._key(snapshot.employee_id), self._ttl, snapshot.model_dump_json(by_alias=True),
            )
        except Exception as exc:
            raise CacheError(
                f"Redis SETEX failed for employee={snapshot.employee_id!r}: {exc}"
            ) from exc

    def invalidate(self, employee_id: str) -> None:
        try:
            self._client.delete(self._key(employee_id))
        except Exception as exc:
            raise CacheError(f"Redis DELETE failed for employee={employee_id!r}: {exc}") from exc
