"""Client-side access to the locations API, fronted by the expiring cache."""

import logging
from typing import Any

import pydantic
import requests
from pydantic import BaseModel, TypeAdapter

from itinerary.cache import ExpiringCacheStore
from itinerary.errors import ErrorCode, LocationServiceError
from itinerary.models import AnnotatedLocation, Location

logger = logging.getLogger(__name__)

LOCATIONS_KEY = "locations"
TRAVEL_TIMES_KEY = "travel_times"
TRAVEL_TIMES_TTL_SECONDS = 30 * 60

_locations_adapter = TypeAdapter(list[Location])
_annotated_adapter = TypeAdapter(list[AnnotatedLocation])


def location_key(location_id: int) -> str:
    return f"location_{location_id}"


def _payload(data: BaseModel | dict[str, Any]) -> dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", exclude_unset=True)
    return dict(data)


class LocationAccessService:
    """The only path through which callers read or write locations.

    Reads are served from the cache while fresh. Writes invalidate the
    affected cache entries so the next read goes to the API. Nothing is
    retried.
    """

    def __init__(
        self,
        base_url: str,
        cache: ExpiringCacheStore,
        session: requests.Session | None = None,
        timeout: float | None = None,
        travel_times_ttl: float = TRAVEL_TIMES_TTL_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._cache = cache
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._timeout = timeout
        self._travel_times_ttl = travel_times_ttl

    def _request(self, method: str, path: str, failure: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = self._session.request(method, url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            raise LocationServiceError(f"{failure}: {e}", code=ErrorCode.NETWORK_ERROR) from e

        try:
            body = response.json()
        except ValueError as e:
            raise LocationServiceError(f"{failure} (HTTP {response.status_code})") from e

        if not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            raise LocationServiceError(error or failure)
        return body

    def _cached_locations(self, data: Any) -> list[Location] | None:
        try:
            return _locations_adapter.validate_python(data)
        except pydantic.ValidationError:
            logger.warning("Cached locations have an unexpected shape, discarding")
            self._cache.remove(LOCATIONS_KEY)
            return None

    def fetch_locations(self, use_cache: bool = True, ttl: float | None = None) -> list[Location]:
        stale = None
        if use_cache:
            entry = self._cache.peek(LOCATIONS_KEY)
            if entry is not None:
                cached = self._cached_locations(entry.data)
                if cached is not None and self._cache.is_fresh(entry):
                    logger.debug("Using cached locations data")
                    return cached
                stale = cached

        try:
            logger.debug("Fetching fresh locations data from API")
            body = self._request("GET", "/locations", "Failed to fetch locations")
            locations = _locations_adapter.validate_python(body.get("data", []))
        except (LocationServiceError, pydantic.ValidationError) as e:
            logger.error("Error fetching locations: %s", e)
            if stale is not None:
                logger.warning("Using stale cache data due to fetch failure")
                return stale
            if isinstance(e, LocationServiceError):
                raise
            raise LocationServiceError("Failed to fetch locations") from e

        if use_cache:
            self._cache.set(LOCATIONS_KEY, [loc.model_dump(mode="json") for loc in locations], ttl=ttl)
        return locations

    def create_location(self, data: BaseModel | dict[str, Any]) -> Location:
        body = self._request("POST", "/locations", "Failed to create location", _payload(data))
        self.invalidate_locations_cache()
        return Location.model_validate(body["data"])

    def update_location(self, location_id: int, data: BaseModel | dict[str, Any]) -> Location:
        body = self._request("PUT", f"/locations/{location_id}", "Failed to update location", _payload(data))
        self.invalidate_location_cache(location_id)
        self.invalidate_locations_cache()
        return Location.model_validate(body["data"])

    def delete_location(self, location_id: int) -> bool:
        self._request("DELETE", f"/locations/{location_id}", "Failed to delete location")
        self.invalidate_location_cache(location_id)
        self.invalidate_locations_cache()
        return True

    def cache_travel_times(self, locations: list[AnnotatedLocation]) -> bool:
        annotated = [
            loc.model_dump(mode="json")
            for loc in locations
            if loc.travel_time_from_previous or loc.distance_from_previous
        ]
        if not annotated:
            return False
        return self._cache.set(TRAVEL_TIMES_KEY, annotated, ttl=self._travel_times_ttl)

    def get_cached_travel_times(self) -> list[AnnotatedLocation] | None:
        data = self._cache.get(TRAVEL_TIMES_KEY)
        if data is None:
            return None
        try:
            return _annotated_adapter.validate_python(data)
        except pydantic.ValidationError:
            self._cache.remove(TRAVEL_TIMES_KEY)
            return None

    def invalidate_locations_cache(self) -> None:
        self._cache.remove(LOCATIONS_KEY)
        self._cache.remove(TRAVEL_TIMES_KEY)
        logger.info("Locations cache invalidated")

    def invalidate_location_cache(self, location_id: int) -> None:
        self._cache.remove(location_key(location_id))
        logger.info("Location cache invalidated for ID: %s", location_id)

    def clear_all_cache(self) -> None:
        self._cache.clear()
        logger.info("All cache cleared")

    def _status(self, key: str) -> dict[str, Any]:
        info = self._cache.get_cache_info(key)
        if info is None:
            return {"cached": False}
        now = info.timestamp + info.age
        return {
            "cached": True,
            "age_seconds": int(info.age),
            "expires_in_seconds": int(info.expires_at - now),
        }

    def get_cache_status(self) -> dict[str, dict[str, Any]]:
        return {
            "locations": self._status(LOCATIONS_KEY),
            "travel_times": self._status(TRAVEL_TIMES_KEY),
        }

    def preload_data(self) -> bool:
        """Warm the locations cache. Never raises."""
        try:
            self.fetch_locations(use_cache=True)
        except LocationServiceError:
            logger.exception("Failed to preload data")
            return False
        logger.info("Data preloaded and cached")
        return True

    def close(self) -> None:
        if self._owns_session:
            self._session.close()
