"""Expiring cache store and its storage substrates."""

from itinerary.cache.storage import DynamoStorage, FileStorage, KeyValueStorage, MemoryStorage
from itinerary.cache.store import CacheEntry, CacheInfo, ExpiringCacheStore

__all__ = [
    "CacheEntry",
    "CacheInfo",
    "DynamoStorage",
    "ExpiringCacheStore",
    "FileStorage",
    "KeyValueStorage",
    "MemoryStorage",
]
