"""Boundary validation for location requests.

Turns decoded request bodies into typed payloads or raises
``ValidationError`` with the first field-specific message.
"""

from typing import Any

import pydantic

from itinerary.errors import ErrorCode, ValidationError
from itinerary.models import LocationCreate, LocationUpdate


def _first_error_message(exc: pydantic.ValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "body"
    if error["type"] == "missing":
        return f"Missing required field: {field}"
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    return f"Invalid value for field: {field}"


def parse_create(body: Any) -> LocationCreate:
    if not isinstance(body, dict):
        raise ValidationError("Invalid request body", code=ErrorCode.INVALID_REQUEST)
    try:
        return LocationCreate.model_validate(body)
    except pydantic.ValidationError as e:
        raise ValidationError(_first_error_message(e)) from e


def parse_update(body: Any) -> LocationUpdate:
    if not isinstance(body, dict):
        raise ValidationError("Invalid request body", code=ErrorCode.INVALID_REQUEST)
    try:
        update = LocationUpdate.model_validate(body)
    except pydantic.ValidationError as e:
        raise ValidationError(_first_error_message(e)) from e
    if not update.model_fields_set:
        raise ValidationError("No valid fields to update")
    return update


def parse_location_id(raw: Any) -> int:
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError("Invalid location ID", code=ErrorCode.INVALID_ID) from None
