#!/usr/bin/env python3
"""Prepare local storage for development.

Creates the DynamoDB Local table backing DynamoStorage (with native TTL
expiry) and, unless --skip-postgres is given, creates and seeds the
``locations`` table in the local Postgres.

Usage:
    python scripts/create_local_tables.py [--skip-postgres]
"""

import sys
from pathlib import Path

import boto3
from botocore.exceptions import ClientError

# Add src to path for config import
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from itinerary.config import get_config
from itinerary.db import AuroraClient
from itinerary.errors import StorageError


def create_cache_table(dynamodb, table_name):
    """Create the cache table keyed by cacheKey."""
    try:
        dynamodb.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "cacheKey", "KeyType": "HASH"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "cacheKey", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        dynamodb.get_waiter("table_exists").wait(TableName=table_name)
        print(f"✓ Created {table_name} table")
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            print(f"✓ {table_name} table already exists")
        else:
            raise


def enable_ttl(dynamodb, table_name):
    """Let DynamoDB expire cache items from the ttl attribute."""
    try:
        dynamodb.update_time_to_live(
            TableName=table_name,
            TimeToLiveSpecification={"Enabled": True, "AttributeName": "ttl"},
        )
        print(f"✓ Enabled TTL on {table_name}")
    except ClientError as e:
        if e.response["Error"]["Code"] == "ValidationException":
            print(f"✓ TTL already enabled on {table_name}")
        else:
            raise


def seed_locations(config):
    """Create the locations table and insert the starter itinerary if it is empty."""
    try:
        with AuroraClient(config) as client:
            client.initialize()
            count = len(client.list_locations())
    except StorageError as e:
        print(f"✗ Postgres at {config.aurora_host}:{config.aurora_port} not ready: {e.message}")
        return False
    print(f"✓ locations table has {count} rows")
    return True


def main():
    config = get_config()
    skip_postgres = "--skip-postgres" in sys.argv[1:]

    endpoint_url = config.dynamodb_endpoint or "http://localhost:8000"

    print(f"Creating {config.cache_table} at {endpoint_url}...")

    # For DynamoDB Local, use dummy credentials
    dynamodb = boto3.client(
        "dynamodb",
        endpoint_url=endpoint_url,
        region_name=config.aws_region,
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )

    create_cache_table(dynamodb, config.cache_table)
    enable_ttl(dynamodb, config.cache_table)

    if not skip_postgres and not seed_locations(config):
        sys.exit(1)

    print()
    print("✅ Local storage ready")


if __name__ == "__main__":
    main()
