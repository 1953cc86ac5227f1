"""Per-view session context owning the cache, the location client and the map provider.

Replaces page-global singletons: whoever builds a context owns it and tears
it down with ``close()`` (or a ``with`` block).
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from itinerary.cache import DynamoStorage, ExpiringCacheStore, FileStorage, KeyValueStorage
from itinerary.clients import get_dynamo_client
from itinerary.config import Config, get_config
from itinerary.errors import ConfigurationError
from itinerary.maps import MapProvider
from itinerary.models import AnnotatedLocation, Location
from itinerary.services.location_client import LocationAccessService
from itinerary.services.travel_times import annotate_travel_times_sync

logger = logging.getLogger(__name__)


@dataclass
class ItineraryContext:
    cache: ExpiringCacheStore
    locations: LocationAccessService
    map_provider: MapProvider | None = None

    def load_itinerary(self, with_travel_times: bool = False) -> list[Location] | list[AnnotatedLocation]:
        """Load locations, optionally annotated with travel times.

        Cached travel times are reused while fresh; otherwise they are
        recomputed through the map provider and cached.
        """
        locations = self.locations.fetch_locations()
        if not with_travel_times or self.map_provider is None:
            return locations

        cached = self.locations.get_cached_travel_times()
        if cached is not None:
            by_id = {loc.id: loc for loc in cached if loc.id is not None}
            return [by_id.get(loc.id) or AnnotatedLocation(**loc.model_dump()) for loc in locations]

        annotated = annotate_travel_times_sync(locations, self.map_provider)
        self.locations.cache_travel_times(annotated)
        return annotated

    def close(self) -> None:
        removed = self.cache.cleanup_expired()
        logger.debug("Context closed, %d expired cache entries removed", removed)
        self.locations.close()
        if self.map_provider is not None:
            self.map_provider.close()

    def __enter__(self) -> "ItineraryContext":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def cache_storage(config: Config) -> KeyValueStorage:
    """The cache substrate named by ``CACHE_BACKEND``."""
    if config.cache_backend == "file":
        return FileStorage(Path(config.cache_file))
    if config.cache_backend == "dynamodb":
        return DynamoStorage(get_dynamo_client(), config.cache_table)
    raise ConfigurationError(f"Unknown CACHE_BACKEND {config.cache_backend!r}; expected 'file' or 'dynamodb'")


def build_context(
    config: Config | None = None,
    storage: KeyValueStorage | None = None,
    map_provider: MapProvider | None = None,
) -> ItineraryContext:
    config = config or get_config()
    cache = ExpiringCacheStore(
        storage if storage is not None else cache_storage(config),
        prefix=config.cache_prefix,
        default_ttl=config.cache_ttl_seconds,
    )
    client = LocationAccessService(
        config.api_base_url,
        cache,
        timeout=config.http_timeout_seconds,
        travel_times_ttl=config.travel_times_ttl_seconds,
    )
    return ItineraryContext(cache=cache, locations=client, map_provider=map_provider)
