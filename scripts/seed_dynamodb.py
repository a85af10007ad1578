"""Seed the DynamoDB policy table with HR policies.

GLOBAL always gets the built-in HRPolicy defaults. Extra scopes come from
an optional JSON file mapping scope -> partial policy, e.g.

    {"DEPT#1": {"leave": {"annual": 25}}}

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566 --scopes-file scopes.json
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

import boto3

from hrcore.models.policy import HRPolicy, LeaveQuotas
from hrcore.persistence.dynamodb_backend import POLICY_TABLE, encode_policy_item

# Seeded when no scopes file is given: one department with a larger annual quota.
SAMPLE_SCOPES: dict[str, dict[str, Any]] = {
    "DEPT#1": {"leave": LeaveQuotas(annual=25).model_dump()},
}


def create_tables(ddb: Any, suffix: str = "") -> bool:
    """Create the policy table; returns False if it already existed."""
    client = ddb.meta.client
    table_name = f"{POLICY_TABLE}{suffix}"
    if table_name in client.list_tables().get("TableNames", []):
        print(f"  Table {table_name} already exists, skipping")
        return False
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
    client.get_waiter("table_exists").wait(TableName=table_name)
    print(f"  Created table {table_name}")
    return True


def build_policies(overrides: dict[str, dict[str, Any]] | None = None) -> dict[str, HRPolicy]:
    """GLOBAL defaults plus each override validated as a full HRPolicy."""
    policies = {"GLOBAL": HRPolicy()}
    for scope, partial in (overrides if overrides is not None else SAMPLE_SCOPES).items():
        policies[scope] = HRPolicy.model_validate({**partial, "scope": scope})
    return policies


def seed_policies(ddb: Any, suffix: str = "",
                  overrides: dict[str, dict[str, Any]] | None = None) -> int:
    tbl = ddb.Table(f"{POLICY_TABLE}{suffix}")
    policies = build_policies(overrides)
    with tbl.batch_writer() as batch:
        for scope, policy in policies.items():
            batch.put_item(Item=encode_policy_item(scope, policy.model_dump(mode="json")))
    print(f"  Seeded {len(policies)} policy scopes: {', '.join(policies)}")
    return len(policies)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the hrcore DynamoDB policy table")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--scopes-file", type=Path, default=None, help="JSON file of scope overrides")
    args = parser.parse_args()

    overrides = json.loads(args.scopes_file.read_text()) if args.scopes_file else None

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url
    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating policy table...")
    create_tables(ddb, suffix=args.table_suffix)
    print("Seeding policies...")
    seed_policies(ddb, suffix=args.table_suffix, overrides=overrides)
    print("Done!")


if __name__ == "__main__":
    main()
