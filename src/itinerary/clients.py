"""Lazy-initialized clients, reused across warm Lambda invocations."""

from functools import lru_cache
from typing import Any

import boto3

from itinerary.config import get_config
from itinerary.db import AuroraClient


@lru_cache(maxsize=1)
def get_dynamo_client() -> Any:
    config = get_config()
    return boto3.client("dynamodb", endpoint_url=config.dynamodb_endpoint, region_name=config.aws_region)


@lru_cache(maxsize=1)
def _aurora_client() -> AuroraClient:
    return AuroraClient(get_config())


def get_aurora_client() -> AuroraClient:
    """Connected, schema-initialized client; reconnects if the connection dropped."""
    client = _aurora_client()
    client.ensure_connected()
    client.initialize()
    return client
