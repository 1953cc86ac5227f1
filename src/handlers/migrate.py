"""Migration handler: upgrades the locations schema to the requested revision."""

from typing import Any

from itinerary.services.migration import run_migrations


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    revision = (event or {}).get("revision", "head")
    result = run_migrations(revision)
    return {"statusCode": 200, "body": result}
