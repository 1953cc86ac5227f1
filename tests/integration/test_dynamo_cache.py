"""Integration tests for the DynamoDB-backed cache against DynamoDB Local."""

import pytest

from itinerary.cache import DynamoStorage, ExpiringCacheStore


@pytest.mark.integration
def test_storage_round_trip(dynamodb_client, cache_table):
    storage = DynamoStorage(dynamodb_client, cache_table)

    storage.set_item("mallorca_cache_locations", '{"data": []}', expires_at=2_000_000_000.5)

    assert storage.get_item("mallorca_cache_locations") == '{"data": []}'
    item = dynamodb_client.get_item(TableName=cache_table, Key={"cacheKey": {"S": "mallorca_cache_locations"}})["Item"]
    assert item["ttl"] == {"N": "2000000000"}

    storage.remove_item("mallorca_cache_locations")
    assert storage.get_item("mallorca_cache_locations") is None


@pytest.mark.integration
def test_keys_filters_by_prefix(dynamodb_client, cache_table):
    storage = DynamoStorage(dynamodb_client, cache_table)
    storage.set_item("mallorca_cache_a", "1")
    storage.set_item("mallorca_cache_b", "2")
    storage.set_item("other_c", "3")

    assert sorted(storage.keys("mallorca_cache_")) == ["mallorca_cache_a", "mallorca_cache_b"]


@pytest.mark.integration
def test_expiring_store_on_dynamo(dynamodb_client, cache_table, clock):
    cache = ExpiringCacheStore(DynamoStorage(dynamodb_client, cache_table), clock=clock)
    assert cache.available

    cache.set("locations", [{"id": 1}], ttl=60)
    assert cache.get("locations") == [{"id": 1}]

    clock.advance(61)
    assert cache.cleanup_expired() == 1
    assert cache.get("locations") is None
