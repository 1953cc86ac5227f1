"""Uniform ``{success, data|error}`` envelopes for API Gateway proxy responses."""

import base64
import binascii
import json
from typing import Any

from itinerary.errors import ErrorCode, ItineraryError, ValidationError


def json_response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, ensure_ascii=False, default=str),
    }


def success(status_code: int = 200, **fields: Any) -> dict[str, Any]:
    return json_response(status_code, {"success": True, **fields})


def failure(status_code: int, error: str) -> dict[str, Any]:
    return json_response(status_code, {"success": False, "error": error})


def error_response(exc: ItineraryError, server_message: str) -> dict[str, Any]:
    """Client errors carry their own message; server errors get an opaque one."""
    if exc.status_code >= 500:
        return failure(500, server_message)
    return failure(exc.status_code, exc.user_message)


def parse_json_body(event: dict[str, Any]) -> Any:
    raw = event.get("body")
    if raw is None:
        raise ValidationError("Invalid request body", code=ErrorCode.INVALID_REQUEST)
    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        return json.loads(raw)
    except (binascii.Error, json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Invalid request body", code=ErrorCode.INVALID_REQUEST) from None
