"""Key/value substrates the expiring cache can sit on."""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class KeyValueStorage(ABC):
    """Minimal string-to-string storage, in the shape of browser local storage.

    Implementations raise on failure; the cache store decides what to do
    about it.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | None: ...

    @abstractmethod
    def set_item(self, key: str, value: str, expires_at: float | None = None) -> None: ...

    @abstractmethod
    def remove_item(self, key: str) -> None: ...

    @abstractmethod
    def keys(self, prefix: str = "") -> list[str]: ...


class MemoryStorage(KeyValueStorage):
    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str, expires_at: float | None = None) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        return [key for key in self._items if key.startswith(prefix)]


class FileStorage(KeyValueStorage):
    """A single JSON object on disk.

    The file is re-read on every call so separate processes sharing it see
    each other's writes; writes go through a temp file and an atomic rename.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        with self._path.open(encoding="utf-8") as f:
            items = json.load(f)
        if not isinstance(items, dict):
            raise ValueError(f"Cache file {self._path} does not hold a JSON object")
        return items

    def _save(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str, expires_at: float | None = None) -> None:
        items = self._load()
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            self._save(items)

    def keys(self, prefix: str = "") -> list[str]:
        return [key for key in self._load() if key.startswith(prefix)]


class DynamoStorage(KeyValueStorage):
    """DynamoDB table keyed by ``cacheKey`` with a native ``ttl`` attribute.

    DynamoDB's own TTL sweeper eventually deletes expired items; the cache
    store still checks expiry on every read.
    """

    def __init__(self, dynamo_client: Any, table_name: str) -> None:
        self._client = dynamo_client
        self._table = table_name

    def get_item(self, key: str) -> str | None:
        response = self._client.get_item(
            TableName=self._table,
            Key={"cacheKey": {"S": key}},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if item is None:
            return None
        return item["value"]["S"]

    def set_item(self, key: str, value: str, expires_at: float | None = None) -> None:
        item: dict[str, Any] = {"cacheKey": {"S": key}, "value": {"S": value}}
        if expires_at is not None:
            item["ttl"] = {"N": str(int(expires_at))}
        self._client.put_item(TableName=self._table, Item=item)

    def remove_item(self, key: str) -> None:
        self._client.delete_item(TableName=self._table, Key={"cacheKey": {"S": key}})

    def keys(self, prefix: str = "") -> list[str]:
        found: list[str] = []
        last_key = None

        while True:
            scan_kwargs: dict[str, Any] = {"TableName": self._table, "ProjectionExpression": "cacheKey"}
            if prefix:
                scan_kwargs["FilterExpression"] = "begins_with(cacheKey, :prefix)"
                scan_kwargs["ExpressionAttributeValues"] = {":prefix": {"S": prefix}}
            if last_key:
                scan_kwargs["ExclusiveStartKey"] = last_key

            response = self._client.scan(**scan_kwargs)
            found.extend(item["cacheKey"]["S"] for item in response.get("Items", []))

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break

        return found
