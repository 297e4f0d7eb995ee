#!/usr/bin/env python3
"""
Provision the DynamoDB table backing the short URL store.

This CLI follows this procedure to provision the table:
- Step 1: Load the table description from a YAML file
- Step 2: Create the table (skip if it already exists)
- Step 3: Wait until the table is ACTIVE
- Step 4: Enable Time To Live on the expiration attribute
- Step 5: Enable point-in-time recovery (if requested)

CLI usage:
    $ python -m bootstrap.provision_table --config config/table.yaml
    $ python -m bootstrap.provision_table --config config/table.yaml --dry-run
    $ python -m bootstrap.provision_table --tags "Owner=Pesho,Service=urlshortener"
    $ python -m bootstrap.provision_table --aws-profile my-profile --region eu-central-1

AWS credentials/region:
    - Use --aws-profile to select a profile from ~/.aws/{credentials,config}.
    - If omitted, boto3's default resolution applies (env vars, default profile, etc).
    - Use --endpoint-url to target DynamoDB Local / LocalStack.

Raises:
    FileNotFoundError: If the --config file does not exist.
    ValueError: For malformed --tags input or unexpected YAML structure.
    botocore.exceptions.BotoCoreError / ClientError: For AWS API failures.
"""

from __future__ import annotations

import argparse
import pathlib

from bootstrap.helper import boto3_session, load_table_config, normalize_user_tags
from bootstrap.aws_actions import (
    create_table,
    enable_point_in_time_recovery,
    enable_ttl,
    wait_until_active,
)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Raises:
        FileNotFoundError: when --config is not a file.
        ValueError: when --tags is malformed or YAML contents are invalid.
        boto3/botocore exceptions: on AWS API failures.
    """
    parser = argparse.ArgumentParser(
        prog="provision_table.py",
        description="Create the short URL DynamoDB table (with TTL and point-in-time recovery) from a YAML description",
    )
    parser.add_argument(
        "--config",
        default="config/table.yaml",
        help="YAML file describing the table (default: config/table.yaml)",
    )
    parser.add_argument(
        "--tags",
        default="",
        help='Comma-separated tags to attach on create, e.g. "Owner=Pesho,Service=urlshortener"',
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview actions without writing to AWS",
    )
    parser.add_argument(
        "--aws-profile",
        default=None,
        help="AWS shared config/credentials profile name to use (e.g., default, dev, prod)",
    )
    parser.add_argument(
        "--region",
        default=None,
        help="AWS region (defaults to the profile's / environment's region)",
    )
    parser.add_argument(
        "--endpoint-url",
        default=None,
        help="Custom DynamoDB endpoint, e.g. http://localhost:8000 for DynamoDB Local",
    )

    args = parser.parse_args(argv)

    table = load_table_config(pathlib.Path(args.config))
    table_name = table["table_name"]
    tags = [{"Key": "Service", "Value": "urlshortener"}] + normalize_user_tags(args.tags)

    session = boto3_session(args.aws_profile, args.region)
    dynamodb = session.client("dynamodb", endpoint_url=args.endpoint_url)

    create_table(dynamodb, table, tags=tags, dry_run=args.dry_run)
    wait_until_active(dynamodb, table_name, dry_run=args.dry_run)
    enable_ttl(dynamodb, table_name, table["ttl_attribute"], dry_run=args.dry_run)
    if table["point_in_time_recovery"]:
        enable_point_in_time_recovery(dynamodb, table_name, dry_run=args.dry_run)

    print(f"Done. {'Previewed' if args.dry_run else 'Provisioned'} table '{table_name}'.")


if __name__ == "__main__":
    main()
