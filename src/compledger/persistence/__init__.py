"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from compledger.core.config import AppSettings
from compledger.persistence.dynamodb_backend import DynamoDBEmployeeStore
from compledger.persistence.memory_backend import MemoryEmployeeStore
from compledger.persistence.redis_backend import RedisSnapshotCache


def create_persistence(settings: AppSettings | None = None):
    """Create the wired-up employee store from application settings.

    Returns:
        Tuple of (employee_store, cache). ``cache`` is None unless Redis is
        enabled and the DynamoDB backend is selected.
    """
    if settings is None:
        settings = AppSettings()

    if settings.store_backend == "memory":
        return MemoryEmployeeStore(), None

    cache = None
    if settings.redis.enabled:
        cache = RedisSnapshotCache(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
            ttl=settings.redis.snapshot_ttl,
        )

    employee_store = DynamoDBEmployeeStore(
        table_suffix=settings.dynamodb.table_suffix,
        region=settings.dynamodb.region,
        endpoint_url=settings.dynamodb.endpoint_url,
        cache=cache,
    )

    return employee_store, cache
