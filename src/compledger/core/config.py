"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class LedgerConfig(BaseSettings):
    """Salary history behaviour."""

    model_config = {"env_prefix": "COMPLEDGER_LEDGER_"}

    page_size: int = 5
    currency: str = "AED"  # display label only, no conversion


class DynamoDBConfig(BaseSettings):
    """DynamoDB employee store configuration."""

    model_config = {"env_prefix": "COMPLEDGER_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis snapshot cache configuration."""

    model_config = {"env_prefix": "COMPLEDGER_REDIS_"}

    enabled: bool = False
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    snapshot_ttl: int = 300  # seconds


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "COMPLEDGER_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    store_backend: Literal["memory", "dynamodb"] = "memory"

    ledger: LedgerConfig = LedgerConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
