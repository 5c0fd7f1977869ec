"""Create the employees table and seed sample compensation state.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from decimal import Decimal
from typing import Any

import boto3

TABLE_BASE = "compledger-employees"

SAMPLE_EMPLOYEES: list[dict[str, Any]] = [
    {
        # Created before salary history existed: pay lives on the record only.
        "employeeId": "EMP-1001",
        "basic": Decimal("5000"),
        "otherAllowance": Decimal("500"),
        "houseRentAllowance": Decimal("2000"),
        "dateOfJoining": "2023-03-15",
        "createdAt": "2023-03-16T09:30:00+00:00",
        "salaryHistory": [],
    },
    {
        "employeeId": "EMP-1002",
        "basic": Decimal("6200"),
        "otherAllowance": Decimal("600"),
        "dateOfJoining": "2024-06-03",
        "createdAt": "2024-06-03T08:00:00+00:00",
        "currentRevisionId": 2,
        "additionalAllowances": [
            {"type": "Mobile", "amount": Decimal("150"), "percentage": Decimal("2.21")},
        ],
        "salaryHistory": [
            {
                "revisionId": 1,
                "month": "June",
                "fromDate": "2024-06-01",
                "toDate": "2025-02-01",
                "basic": Decimal("6000"),
                "otherAllowance": Decimal("500"),
                "totalSalary": Decimal("6500"),
                "createdAt": "2024-06-03T08:00:00+00:00",
                "isInitial": True,
            },
            {
                "revisionId": 2,
                "month": "February",
                "fromDate": "2025-02-01",
                "toDate": None,
                "basic": Decimal("6200"),
                "otherAllowance": Decimal("600"),
                "totalSalary": Decimal("6800"),
                "createdAt": "2025-02-01T10:15:00+00:00",
                "isInitial": False,
            },
        ],
    },
    {
        # Brand new employee with no pay recorded yet.
        "employeeId": "EMP-1003",
        "basic": Decimal("0"),
        "otherAllowance": Decimal("0"),
        "dateOfJoining": "2025-09-01",
        "createdAt": "2025-09-01T07:45:00+00:00",
        "salaryHistory": [],
    },
]


def create_tables(ddb: Any, suffix: str = "") -> None:
    """Create the employees table. Skips if it already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    table_name = f"{TABLE_BASE}{suffix}"
    if table_name in existing:
        print(f"  Table {table_name} already exists, skipping")
        return
    client.create_table(
        TableName=table_name,
        KeySchema=[
            {"AttributeName": "PK", "KeyType": "HASH"},
            {"AttributeName": "SK", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "PK", "AttributeType": "S"},
            {"AttributeName": "SK", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    print(f"  Created table {table_name}")


def seed_employees(ddb: Any, suffix: str = "") -> None:
    """Write the sample employees, overwriting any previous seed."""
    tbl = ddb.Table(f"{TABLE_BASE}{suffix}")
    with tbl.batch_writer() as batch:
        for employee in SAMPLE_EMPLOYEES:
            item = {"PK": f"EMPLOYEE#{employee['employeeId']}", "SK": "COMPENSATION", **employee}
            batch.put_item(Item=item)
    print(f"  Seeded {len(SAMPLE_EMPLOYEES)} employees")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the compensation ledger DynamoDB table")
    parser.add_argument("--endpoint-url", default=None, help="LocalStack endpoint")
    parser.add_argument("--region", default="us-east-1")
    parser.add_argument("--suffix", default="", help="Table suffix, e.g. -dev")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url
    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.suffix)
    print("Seeding employees...")
    seed_employees(ddb, suffix=args.suffix)
    print("Done.")


if __name__ == "__main__":
    main()
