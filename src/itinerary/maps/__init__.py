"""Mapping provider abstraction layer."""

from itinerary.maps.google_provider import GoogleMapsProvider
from itinerary.maps.interface import (
    Coordinates,
    GeocodeResult,
    MapProvider,
    PlaceDetails,
    PlaceReview,
    PlaceSummary,
    TravelEstimate,
    get_map_provider,
)

__all__ = [
    "Coordinates",
    "GeocodeResult",
    "GoogleMapsProvider",
    "MapProvider",
    "PlaceDetails",
    "PlaceReview",
    "PlaceSummary",
    "TravelEstimate",
    "get_map_provider",
]
