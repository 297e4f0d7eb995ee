"""
AWS action primitives for provisioning the short URL table.

Exposed functions (signatures):
    create_table(dynamodb_client, table: dict[str, Any], *, tags=None, dry_run=False) -> bool
    wait_until_active(dynamodb_client, table_name: str, *, dry_run=False) -> None
    enable_ttl(dynamodb_client, table_name: str, attribute: str, *, dry_run=False) -> None
    enable_point_in_time_recovery(dynamodb_client, table_name: str, *, dry_run=False) -> None

Behavior:
    - Every action is idempotent: re-running against an existing table is safe.
    - Every action prints a concise log line, prefixed with [DRY-RUN] when nothing is written.

Raises:
    botocore.exceptions.BotoCoreError / ClientError for AWS API failures.
"""

from __future__ import annotations

from typing import Any

from botocore.exceptions import ClientError


def create_table(
    dynamodb_client,
    table: dict[str, Any],
    *,
    tags: list[dict[str, str]] | None = None,
    dry_run: bool = False,
) -> bool:
    """Create the short URL table keyed by a single string partition key.

    Args:
        dynamodb_client:
            Boto3 DynamoDB client.
        table (dict):
            Table description (see bootstrap.helper.load_table_config).
        tags (list[dict[str, str]] | None):
            Tags to attach on create.
        dry_run (bool):
            If True, print intent without performing any write.

    Returns:
        bool: True if the table was created, False if it already existed (or dry run).

    Example:
        >>> create_table(dynamodb, {"table_name": "UrlShortener", "partition_key": "shortCode", ...})  # doctest: +SKIP
        DynamoDB create table='UrlShortener' [created]
        True
    """
    table_name = table["table_name"]
    msg = f"DynamoDB create table='{table_name}'"
    if dry_run:
        print("[DRY-RUN]", msg)
        return False

    kwargs: dict[str, Any] = {
        "TableName": table_name,
        "AttributeDefinitions": [{"AttributeName": table["partition_key"], "AttributeType": "S"}],
        "KeySchema": [{"AttributeName": table["partition_key"], "KeyType": "HASH"}],
        "BillingMode": table["billing_mode"],
    }
    if table["billing_mode"] == "PROVISIONED":
        kwargs["ProvisionedThroughput"] = {"ReadCapacityUnits": 5, "WriteCapacityUnits": 5}
    if tags:
        kwargs["Tags"] = tags

    try:
        dynamodb_client.create_table(**kwargs)
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") != "ResourceInUseException":
            raise
        print(msg + " [already exists]")
        return False

    print(msg + " [created]")
    return True


def wait_until_active(dynamodb_client, table_name: str, *, dry_run: bool = False) -> None:
    """Block until DescribeTable reports the table as ACTIVE."""
    if dry_run:
        print("[DRY-RUN]", f"DynamoDB wait table='{table_name}' ACTIVE")
        return
    dynamodb_client.get_waiter("table_exists").wait(TableName=table_name)


def enable_ttl(dynamodb_client, table_name: str, attribute: str, *, dry_run: bool = False) -> None:
    """Enable Time To Live on `attribute` unless it's already enabled.

    UpdateTimeToLive fails when TTL is already on, so the current
    status is checked first.
    """
    msg = f"DynamoDB TTL table='{table_name}' attribute='{attribute}'"
    if dry_run:
        print("[DRY-RUN]", msg)
        return

    current = dynamodb_client.describe_time_to_live(TableName=table_name).get("TimeToLiveDescription", {})
    if current.get("TimeToLiveStatus") in ("ENABLED", "ENABLING") and current.get("AttributeName") == attribute:
        print(msg + " [already enabled]")
        return

    dynamodb_client.update_time_to_live(
        TableName=table_name,
        TimeToLiveSpecification={"Enabled": True, "AttributeName": attribute},
    )
    print(msg + " [enabled]")


def enable_point_in_time_recovery(dynamodb_client, table_name: str, *, dry_run: bool = False) -> None:
    """Turn on continuous backups (point-in-time recovery)."""
    msg = f"DynamoDB PITR table='{table_name}'"
    if dry_run:
        print("[DRY-RUN]", msg)
        return

    dynamodb_client.update_continuous_backups(
        TableName=table_name,
        PointInTimeRecoverySpecification={"PointInTimeRecoveryEnabled": True},
    )
    print(msg + " [enabled]")
