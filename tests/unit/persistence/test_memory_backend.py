"""Tests for the in-memory backends and the persistence factory."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest.mock import patch

import fakeredis
import pytest
from moto import mock_aws

from compledger.core.config import AppSettings, DynamoDBConfig, RedisConfig
from compledger.core.exceptions import EmployeeNotFoundError, PersistenceError
from compledger.models.employee import CompensationPayload, EmployeeSnapshot
from compledger.persistence import create_persistence
from compledger.persistence.dynamodb_backend import DynamoDBEmployeeStore
from compledger.persistence.memory_backend import MemoryEmployeeStore, MemorySnapshotCache
from compledger.persistence.protocols import IEmployeeStore, ISnapshotCache
from compledger.persistence.redis_backend import RedisSnapshotCache


@pytest.fixture
def store(legacy_employee):
    s = MemoryEmployeeStore()
    s.put(legacy_employee)
    return s


class TestMemoryEmployeeStore:
    def test_satisfies_protocol(self, store):
        assert isinstance(store, IEmployeeStore)

    def test_load_unknown(self, store):
        with pytest.raises(EmployeeNotFoundError) as excinfo:
            store.load("EMP-0")
        assert excinfo.value.employee_id == "EMP-0"

    def test_replace_keeps_other_fields(self, store, make_entry):
        entry = make_entry(date(2023, 3, 1), None, "7000", "0", revision_id=1)
        payload = CompensationPayload(
            basic=Decimal("7000"), other_allowance=Decimal("0"),
            salary_history=(entry,), current_revision_id=1,
        )
        store.replace_compensation("EMP-1001", payload)
        stored = store.load("EMP-1001")
        assert stored.basic == Decimal("7000")
        assert stored.salary_history == (entry,)
        assert stored.current_revision_id == 1
        assert stored.date_of_joining == date(2023, 3, 15)
        assert store.writes == [("EMP-1001", payload)]

    def test_replace_unknown_employee(self, store):
        with pytest.raises(EmployeeNotFoundError):
            store.replace_compensation("EMP-0", CompensationPayload(basic=0, other_allowance=0))

    def test_fail_next_write_fails_once(self, store):
        payload = CompensationPayload(basic=1, other_allowance=0)
        store.fail_next_write("disk full")
        with pytest.raises(PersistenceError, match="disk full"):
            store.replace_compensation("EMP-1001", payload)
        store.replace_compensation("EMP-1001", payload)
        assert len(store.writes) == 1


class TestMemorySnapshotCache:
    def test_round_trip_and_invalidate(self, legacy_employee):
        cache = MemorySnapshotCache()
        assert isinstance(cache, ISnapshotCache)
        assert cache.get("EMP-1001") is None
        cache.put(legacy_employee)
        assert cache.get("EMP-1001") == legacy_employee
        cache.invalidate("EMP-1001")
        cache.invalidate("EMP-1001")
        assert cache.get("EMP-1001") is None


class TestCreatePersistence:
    def test_memory_backend_by_default(self):
        employee_store, cache = create_persistence(AppSettings(store_backend="memory"))
        assert isinstance(employee_store, MemoryEmployeeStore)
        assert cache is None

    def test_dynamodb_without_cache(self):
        settings = AppSettings(store_backend="dynamodb", dynamodb=DynamoDBConfig(table_suffix="-dev"))
        with mock_aws():
            employee_store, cache = create_persistence(settings)
        assert isinstance(employee_store, DynamoDBEmployeeStore)
        assert employee_store.table_name == "compledger-employees-dev"
        assert cache is None

    def test_dynamodb_with_redis_cache(self):
        settings = AppSettings(store_backend="dynamodb", redis=RedisConfig(enabled=True))
        with mock_aws(), patch("redis.Redis", return_value=fakeredis.FakeRedis(decode_responses=True)):
            employee_store, cache = create_persistence(settings)
        assert isinstance(cache, RedisSnapshotCache)
        assert isinstance(employee_store, DynamoDBEmployeeStore)


def test_snapshot_defaults():
    snapshot = EmployeeSnapshot()
    assert snapshot.basic == Decimal("0")
    assert snapshot.salary_history == ()
    assert not snapshot.has_legacy_pay
