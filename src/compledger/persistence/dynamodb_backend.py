"""DynamoDB backend implementing IEmployeeStore with optional snapshot caching."""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError as PydanticValidationError

from compledger.core.exceptions import CacheError, EmployeeNotFoundError, PersistenceError
from compledger.models.employee import CompensationPayload, EmployeeSnapshot
from compledger.models.ledger_entry import validation_error_from

logger = logging.getLogger(__name__)

TABLE_BASE = "compledger-employees"
SORT_KEY = "COMPENSATION"


def employee_key(employee_id: str) -> dict[str, str]:
    return {"PK": f"EMPLOYEE#{employee_id}", "SK": SORT_KEY}


def to_dynamodb(obj: Any) -> Any:
    """Convert model_dump() output into DynamoDB-safe values.

    Floats become Decimal via their string form, dates become ISO strings.
    """
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {k: to_dynamodb(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_dynamodb(i) for i in obj]
    return obj


def snapshot_item(snapshot: EmployeeSnapshot) -> dict[str, Any]:
    """Full DynamoDB item for an employee snapshot."""
    item = to_dynamodb(snapshot.model_dump(by_alias=True, exclude_none=True))
    item.update(employee_key(snapshot.employee_id))
    return item


class DynamoDBEmployeeStore:
    """Production IEmployeeStore backed by DynamoDB + optional snapshot cache."""

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None, cache: Any = None) -> None:
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        self._cache = cache
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)

    @property
    def table_name(self) -> str:
        return f"{TABLE_BASE}{self._table_suffix}"

    def _table(self):
        return self._ddb.Table(self.table_name)

    def put(self, snapshot: EmployeeSnapshot) -> None:
        """Create or overwrite a whole employee item."""
        self._table().put_item(Item=snapshot_item(snapshot))
        self._invalidate(snapshot.employee_id)

    def _invalidate(self, employee_id: str) -> None:
        """Drop the cached snapshot. A cache failure never fails the write."""
        if self._cache is None:
            return
        try:
            self._cache.invalidate(employee_id)
        except CacheError as exc:
            logger.warning("Employee %s: snapshot cache invalidation failed: %s", employee_id, exc)

    # ---- IEmployeeStore methods ----

    def load(self, employee_id: str) -> EmployeeSnapshot:
        if self._cache is not None:
            cached = self._cache.get(employee_id)
            if cached is not None:
                return cached

        resp = self._table().get_item(Key=employee_key(employee_id))
        item = resp.get("Item")
        if item is None:
            raise EmployeeNotFoundError(employee_id)

        data = {k: v for k, v in item.items() if k not in ("PK", "SK")}
        data.setdefault("employeeId", employee_id)
        try:
            snapshot = EmployeeSnapshot.model_validate(data)
        except PydanticValidationError as exc:
            raise validation_error_from(exc) from None

        if self._cache is not None:
            self._cache.put(snapshot)
        return snapshot

    def replace_compensation(self, employee_id: str, payload: CompensationPayload) -> None:
        """Overwrite pay, the whole salary history and the revision pointer."""
        values = to_dynamodb(payload.model_dump(by_alias=True))
        try:
            self._table().update_item(
                Key=employee_key(employee_id),
                UpdateExpression=(
                    "SET basic = :basic, otherAllowance = :other, "
                    "salaryHistory = :history, currentRevisionId = :pointer"
                ),
                ConditionExpression="attribute_exists(PK)",
                ExpressionAttributeValues={
                    ":basic": values["basic"],
                    ":other": values["otherAllowance"],
                    ":history": values["salaryHistory"],
                    ":pointer": values["currentRevisionId"],
                },
            )
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            if code == "ConditionalCheckFailedException":
                raise PersistenceError(f"Employee {employee_id!r} no longer exists") from exc
            raise PersistenceError(exc.response.get("Error", {}).get("Message") or None) from exc
        except BotoCoreError as exc:
            raise PersistenceError(str(exc)) from exc
        finally:
            self._invalidate(employee_id)
        logger.debug("Employee %s: replaced %d salary history entries",
                     employee_id, len(payload.salary_history))
