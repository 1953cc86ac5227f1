"""Unit tests for AuroraClient query behaviour against a mocked connection."""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import psycopg
import pytest

from itinerary.config import Config
from itinerary.db import AuroraClient
from itinerary.db.seed import STARTER_ITINERARY
from itinerary.errors import LocationNotFoundError, StorageError
from itinerary.models import LocationCreate, LocationUpdate

NOW = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)

ROW = {
    "id": 12,
    "name": "Cala X",
    "lat": 39.9,
    "lng": 3.1,
    "day": "day1",
    "time": "9:00 AM",
    "description": "test",
    "created_at": NOW,
    "updated_at": NOW,
}


@pytest.fixture
def config():
    return Config(
        aws_region="us-east-1",
        aurora_host="localhost",
        aurora_port=5432,
        aurora_database="itinerary",
        aurora_user="itinerary",
        aurora_password="localdev",
        cache_table="ItineraryCache",
        cache_prefix="mallorca_cache_",
        cache_ttl_seconds=300,
        travel_times_ttl_seconds=1800,
        cache_file=".itinerary_cache.json",
        api_base_url="http://localhost:3000/api",
        alembic_config="alembic.ini",
        environment="test",
    )


@pytest.fixture
def cursor():
    return MagicMock()


@pytest.fixture
def client(config, cursor):
    conn = MagicMock()
    conn.closed = False
    conn.cursor.return_value.__enter__.return_value = cursor
    with patch("itinerary.db.aurora.psycopg.connect", return_value=conn):
        client = AuroraClient(config)
        client.connect()
    return client


def test_connect_uses_config_and_autocommit(config):
    with patch("itinerary.db.aurora.psycopg.connect") as mock_connect:
        AuroraClient(config).connect()

    kwargs = mock_connect.call_args.kwargs
    assert kwargs["host"] == "localhost"
    assert kwargs["dbname"] == "itinerary"
    assert kwargs["autocommit"] is True


def test_connect_failure_is_storage_error(config):
    with patch("itinerary.db.aurora.psycopg.connect", side_effect=psycopg.OperationalError("refused")):
        with pytest.raises(StorageError, match="Could not connect"):
            AuroraClient(config).connect()


def test_queries_require_connection(config):
    with pytest.raises(StorageError, match="not connected"):
        AuroraClient(config).list_locations()


def test_list_locations(client, cursor):
    cursor.fetchall.return_value = [ROW]

    locations = client.list_locations()

    assert [loc.id for loc in locations] == [12]
    query = cursor.execute.call_args.args[0]
    assert "WHEN 'day1' THEN 1" in query
    assert query.strip().endswith("id")


def test_create_location(client, cursor):
    cursor.fetchall.return_value = [ROW]
    payload = LocationCreate(name="Cala X", lat=39.9, lng=3.1, day="day1", time="9:00 AM", description="test")

    created = client.create_location(payload)

    assert created.id == 12
    assert created.created_at == created.updated_at
    assert cursor.execute.call_args.args[1] == ("Cala X", 39.9, 3.1, "day1", "9:00 AM", "test")


def test_update_location_sets_only_supplied_columns(client, cursor):
    cursor.fetchall.return_value = [{**ROW, "time": "10:00 AM"}]

    updated = client.update_location(12, LocationUpdate(time="10:00 AM", lat=39.5))

    assert updated.time == "10:00 AM"
    query, params = cursor.execute.call_args.args
    assert params == (39.5, "10:00 AM", 12)
    rendered = query.as_string(None)
    assert '"lat" = %s' in rendered
    assert '"time" = %s' in rendered
    assert '"name"' not in rendered
    assert "updated_at = GREATEST(clock_timestamp()" in rendered


def test_update_missing_location_raises_not_found(client, cursor):
    cursor.fetchall.return_value = []

    with pytest.raises(LocationNotFoundError):
        client.update_location(999999, LocationUpdate(name="x"))


def test_delete_location(client, cursor):
    cursor.fetchall.return_value = [{"id": 12}]

    client.delete_location(12)

    assert cursor.execute.call_args.args == ("DELETE FROM locations WHERE id = %s RETURNING id", (12,))


def test_delete_missing_location_raises_not_found(client, cursor):
    cursor.fetchall.return_value = []

    with pytest.raises(LocationNotFoundError):
        client.delete_location(999999)


def test_driver_errors_become_storage_errors(client, cursor):
    cursor.execute.side_effect = psycopg.errors.CheckViolation("chk_locations_day")

    with pytest.raises(StorageError, match="Listing locations failed"):
        client.list_locations()


def test_initialize_seeds_empty_table_once(client, cursor):
    cursor.fetchone.return_value = (0,)

    client.initialize()
    client.initialize()

    statements = [c.args[0] for c in cursor.execute.call_args_list]
    assert "pg_advisory_xact_lock" in statements[0]
    assert "CREATE TABLE IF NOT EXISTS locations" in statements[1]
    assert len(statements) == 3
    cursor.executemany.assert_called_once()
    assert len(cursor.executemany.call_args.args[1]) == len(STARTER_ITINERARY)


def test_initialize_skips_seed_when_rows_exist(client, cursor):
    cursor.fetchone.return_value = (26,)

    client.initialize()

    cursor.executemany.assert_not_called()


def test_initialize_failure_can_be_retried(client, cursor):
    cursor.execute.side_effect = [psycopg.OperationalError("lock timeout"), None, None, None]
    cursor.fetchone.return_value = (5,)

    with pytest.raises(StorageError):
        client.initialize()
    client.initialize()

    assert cursor.execute.call_count == 4


def test_starter_itinerary_covers_every_day():
    assert len(STARTER_ITINERARY) == 26
    assert {loc.day for loc in STARTER_ITINERARY} == {"day1", "day2", "day3", "day4", "day5"}


def test_health_check(client, cursor, config):
    assert client.health_check() is True
    assert AuroraClient(config).health_check() is False
