"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

from compledger.core.config import AppSettings, DynamoDBConfig, LedgerConfig, RedisConfig


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.store_backend == "memory"
    assert settings.ledger.page_size == 5


def test_ledger_config_defaults():
    config = LedgerConfig()
    assert config.page_size == 5
    assert config.currency == "AED"


def test_redis_disabled_by_default():
    config = RedisConfig()
    assert config.enabled is False
    assert config.snapshot_ttl == 300


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("COMPLEDGER_LEDGER_PAGE_SIZE", "10")
    monkeypatch.setenv("COMPLEDGER_DYNAMO_TABLE_SUFFIX", "-uat")
    assert LedgerConfig().page_size == 10
    assert DynamoDBConfig().table_suffix == "-uat"
