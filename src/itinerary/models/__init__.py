"""
Pydantic models for the itinerary service.
"""

from itinerary.models.location import (
    DAYS,
    AnnotatedLocation,
    Day,
    Location,
    LocationCreate,
    LocationUpdate,
)

__all__ = ["DAYS", "AnnotatedLocation", "Day", "Location", "LocationCreate", "LocationUpdate"]
