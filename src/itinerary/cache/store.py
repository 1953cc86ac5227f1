"""Namespaced TTL cache over a persistent key/value substrate."""

import logging
import time
from typing import Any, Callable

import pydantic
from pydantic import BaseModel

from itinerary.cache.storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "mallorca_cache_"
DEFAULT_TTL_SECONDS = 5 * 60

_PROBE_KEY = "__storage_probe__"


class CacheEntry(BaseModel):
    data: Any
    timestamp: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        # A non-positive TTL never yields a fresh entry.
        return now > self.expires_at or self.expires_at <= self.timestamp


class CacheInfo(BaseModel):
    timestamp: float
    expires_at: float
    age: float


class ExpiringCacheStore:
    """Expiring key/value cache isolated under a key prefix.

    Storage availability is probed once; if the probe fails the store stays
    disabled for its lifetime and every call degrades to "nothing cached".
    No method raises on storage failure.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        prefix: str = DEFAULT_PREFIX,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage
        self._prefix = prefix
        self._default_ttl = default_ttl
        self._clock = clock
        self.available = self._probe()

    def _probe(self) -> bool:
        try:
            self._storage.set_item(_PROBE_KEY, _PROBE_KEY)
            self._storage.remove_item(_PROBE_KEY)
            return True
        except Exception:
            logger.warning("Cache storage not available, caching disabled", exc_info=True)
            return False

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def _load(self, key: str) -> CacheEntry | None:
        """Read an entry, dropping it if it cannot be parsed."""
        try:
            raw = self._storage.get_item(self._key(key))
        except Exception:
            logger.exception("Cache read failed for %s", key)
            return None
        if raw is None:
            return None
        try:
            return CacheEntry.model_validate_json(raw)
        except pydantic.ValidationError:
            logger.warning("Discarding corrupt cache entry %s", key)
            self.remove(key)
            return None

    def set(self, key: str, data: Any, ttl: float | None = None) -> bool:
        if not self.available:
            return False

        ttl = self._default_ttl if ttl is None else ttl
        now = self._clock()
        try:
            entry = CacheEntry(data=data, timestamp=now, expires_at=now + ttl)
            self._storage.set_item(self._key(key), entry.model_dump_json(), expires_at=entry.expires_at)
            return True
        except Exception:
            logger.exception("Cache write failed for %s", key)
            return False

    def get(self, key: str) -> Any | None:
        if not self.available:
            return None

        entry = self._load(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self.remove(key)
            return None
        return entry.data

    def is_fresh(self, entry: CacheEntry) -> bool:
        return not entry.is_expired(self._clock())

    def peek(self, key: str) -> CacheEntry | None:
        """Return the stored entry whether or not it has expired, without evicting it."""
        if not self.available:
            return None
        return self._load(key)

    def remove(self, key: str) -> bool:
        if not self.available:
            return False
        try:
            self._storage.remove_item(self._key(key))
            return True
        except Exception:
            logger.exception("Cache remove failed for %s", key)
            return False

    def clear(self) -> bool:
        if not self.available:
            return False
        try:
            for storage_key in self._storage.keys(self._prefix):
                self._storage.remove_item(storage_key)
            return True
        except Exception:
            logger.exception("Cache clear failed")
            return False

    def is_expired(self, key: str) -> bool:
        entry = self.peek(key)
        return entry is None or entry.is_expired(self._clock())

    def get_cache_info(self, key: str) -> CacheInfo | None:
        entry = self.peek(key)
        if entry is None:
            return None
        return CacheInfo(
            timestamp=entry.timestamp,
            expires_at=entry.expires_at,
            age=self._clock() - entry.timestamp,
        )

    def cleanup_expired(self) -> int:
        """Evict every expired or unreadable entry in the namespace."""
        if not self.available:
            return 0

        try:
            storage_keys = self._storage.keys(self._prefix)
        except Exception:
            logger.exception("Cache sweep could not list keys")
            return 0

        cleaned = 0
        for storage_key in storage_keys:
            key = storage_key[len(self._prefix) :]
            if self.is_expired(key):
                self.remove(key)
                cleaned += 1

        if cleaned:
            logger.info("Cache sweep removed %d expired entries", cleaned)
        return cleaned
