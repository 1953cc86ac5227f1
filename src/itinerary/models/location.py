"""Pydantic models for itinerary locations."""

import math
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class Day(str, Enum):
    DAY1 = "day1"
    DAY2 = "day2"
    DAY3 = "day3"
    DAY4 = "day4"
    DAY5 = "day5"


DAYS: tuple[str, ...] = tuple(day.value for day in Day)

_TEXT_LABELS = {"name": "Name", "time": "Time", "description": "Description"}

# Matches the VARCHAR sizes of the locations table.
_TEXT_MAX_LENGTHS = {"name": 255, "time": 50}


def _coordinate(value: Any, low: float, high: float, message: str, allow_strings: bool = True) -> float:
    if isinstance(value, bool):
        raise ValueError(message)
    if isinstance(value, str) and allow_strings:
        try:
            value = float(value.strip())
        except ValueError:
            raise ValueError(message) from None
    if not isinstance(value, (int, float)):
        raise ValueError(message)
    value = float(value)
    if not math.isfinite(value) or value < low or value > high:
        raise ValueError(message)
    return value


class _LocationRules(BaseModel):
    """Field rules shared by create and update payloads."""

    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    @field_validator("name", "time", "description", mode="before", check_fields=False)
    @classmethod
    def _non_empty_text(cls, value: Any, info: ValidationInfo) -> str:
        label = _TEXT_LABELS[info.field_name]
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{label} must be a non-empty string")
        value = value.strip()
        limit = _TEXT_MAX_LENGTHS.get(info.field_name)
        if limit is not None and len(value) > limit:
            raise ValueError(f"{label} must be at most {limit} characters")
        return value

    @field_validator("lat", mode="before", check_fields=False)
    @classmethod
    def _latitude(cls, value: Any) -> float:
        return _coordinate(value, -90, 90, "Latitude must be a number between -90 and 90")

    @field_validator("lng", mode="before", check_fields=False)
    @classmethod
    def _longitude(cls, value: Any) -> float:
        return _coordinate(value, -180, 180, "Longitude must be a number between -180 and 180")

    @field_validator("day", mode="before", check_fields=False)
    @classmethod
    def _known_day(cls, value: Any) -> str:
        if not isinstance(value, str) or value not in DAYS:
            raise ValueError(f"Day must be one of: {', '.join(DAYS)}")
        return str(Day(value).value)


class LocationCreate(_LocationRules):
    name: str
    lat: float
    lng: float
    day: Day
    time: str
    description: str


class LocationUpdate(_LocationRules):
    name: str | None = None
    lat: float | None = None
    lng: float | None = None
    day: Day | None = None
    time: str | None = None
    description: str | None = None

    # Updates take coordinates only as JSON numbers, unlike creates.
    @field_validator("lat", mode="before")
    @classmethod
    def _latitude(cls, value: Any) -> float:
        return _coordinate(value, -90, 90, "Latitude must be a number between -90 and 90", allow_strings=False)

    @field_validator("lng", mode="before")
    @classmethod
    def _longitude(cls, value: Any) -> float:
        return _coordinate(value, -180, 180, "Longitude must be a number between -180 and 180", allow_strings=False)

    def changes(self) -> dict[str, Any]:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)


class Location(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: int | None = None
    name: str
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    day: Day
    time: str
    description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AnnotatedLocation(Location):
    """A location with travel details from the previous stop of the same day.

    Computed per session for display; never persisted.
    """

    travel_time_from_previous: str | None = None
    distance_from_previous: str | None = None
