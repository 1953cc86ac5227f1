"""Unit tests for the per-view itinerary context."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from itinerary.cache import ExpiringCacheStore, FileStorage, MemoryStorage
from itinerary.config import Config
from itinerary.context import ItineraryContext, build_context
from itinerary.errors import ConfigurationError
from itinerary.maps import TravelEstimate
from itinerary.models import AnnotatedLocation
from itinerary.services.location_client import TRAVEL_TIMES_KEY, LocationAccessService


def _stop(id, time, lat):
    return {"id": id, "name": f"Stop {id}", "lat": lat, "lng": 3.0, "day": "day1", "time": time, "description": "x"}


STOPS = [_stop(1, "7:00 AM", 39.1), _stop(2, "9:00 AM", 39.2)]


@pytest.fixture
def session():
    session = MagicMock()
    response = MagicMock(status_code=200)
    response.json.return_value = {"success": True, "data": STOPS, "count": 2}
    session.request.return_value = response
    return session


@pytest.fixture
def provider():
    provider = MagicMock()
    provider.travel_estimate = AsyncMock(
        return_value=TravelEstimate(duration_text="9 mins", distance_text="6.1 km", duration_seconds=540, distance_meters=6100)
    )
    return provider


@pytest.fixture
def context(session, provider, clock):
    cache = ExpiringCacheStore(MemoryStorage(), clock=clock)
    client = LocationAccessService("http://localhost:3000/api", cache, session=session)
    return ItineraryContext(cache=cache, locations=client, map_provider=provider)


def test_load_itinerary_without_travel_times(context, provider):
    locations = context.load_itinerary()

    assert [loc.id for loc in locations] == [1, 2]
    provider.travel_estimate.assert_not_awaited()


def test_load_itinerary_annotates_and_caches(context, provider):
    first = context.load_itinerary(with_travel_times=True)
    second = context.load_itinerary(with_travel_times=True)

    assert first[1].travel_time_from_previous == "9 mins"
    assert second[1].distance_from_previous == "6.1 km"
    assert second[0].travel_time_from_previous is None
    assert all(isinstance(loc, AnnotatedLocation) for loc in second)
    assert provider.travel_estimate.await_count == 1


def test_load_itinerary_recomputes_after_travel_times_expire(context, provider, clock):
    context.load_itinerary(with_travel_times=True)
    clock.advance(1801)

    context.load_itinerary(with_travel_times=True)

    assert provider.travel_estimate.await_count == 2


def test_load_itinerary_without_provider_skips_annotation(session, clock):
    cache = ExpiringCacheStore(MemoryStorage(), clock=clock)
    context = ItineraryContext(cache=cache, locations=LocationAccessService("http://x", cache, session=session))

    locations = context.load_itinerary(with_travel_times=True)

    assert not isinstance(locations[0], AnnotatedLocation)


def test_close_sweeps_expired_entries_and_closes_provider(session, provider, clock):
    storage = MemoryStorage()
    cache = ExpiringCacheStore(storage, clock=clock)
    context = ItineraryContext(cache=cache, locations=LocationAccessService("http://x", cache, session=session), map_provider=provider)
    cache.set(TRAVEL_TIMES_KEY, [], ttl=10)
    clock.advance(11)

    with context:
        pass

    assert storage.keys() == []
    provider.close.assert_called_once()


def _config(tmp_path, **overrides):
    fields = dict(
        aws_region="us-east-1",
        aurora_host="localhost",
        aurora_port=5432,
        aurora_database="itinerary",
        aurora_user="itinerary",
        aurora_password="localdev",
        cache_table="ItineraryCache",
        cache_prefix="test_cache_",
        cache_ttl_seconds=120,
        travel_times_ttl_seconds=600,
        cache_file=str(tmp_path / "cache.json"),
        api_base_url="http://localhost:3000/api/",
        http_timeout_seconds=5,
        alembic_config="alembic.ini",
        environment="test",
    )
    return Config(**{**fields, **overrides})


def test_build_context_uses_config(tmp_path):
    context = build_context(_config(tmp_path))

    assert context.cache.available is True
    assert context.cache.set("probe", {"ok": True}) is True
    assert "test_cache_probe" in FileStorage(tmp_path / "cache.json").keys()
    assert context.cache.get_cache_info("probe").expires_at - context.cache.get_cache_info("probe").timestamp == 120
    assert context.map_provider is None
    context.close()


def test_build_context_on_dynamodb(tmp_path):
    dynamo = MagicMock()
    dynamo.get_item.return_value = {}
    dynamo.scan.return_value = {"Items": []}

    with patch("itinerary.context.get_dynamo_client", return_value=dynamo):
        context = build_context(_config(tmp_path, cache_backend="dynamodb", cache_table="ItineraryCacheTest"))

    assert context.cache.available is True
    assert context.cache.set("locations", []) is True
    put = dynamo.put_item.call_args_list[-1].kwargs
    assert put["TableName"] == "ItineraryCacheTest"
    assert put["Item"]["cacheKey"] == {"S": "test_cache_locations"}
    assert not (tmp_path / "cache.json").exists()
    context.close()


def test_unknown_cache_backend_is_a_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError, match="CACHE_BACKEND"):
        build_context(_config(tmp_path, cache_backend="redis"))
