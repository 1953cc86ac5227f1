from abc import ABC, abstractmethod

from pydantic import BaseModel


class Coordinates(BaseModel):
    lat: float
    lng: float


class TravelEstimate(BaseModel):
    duration_text: str
    distance_text: str
    duration_seconds: int | None = None
    distance_meters: int | None = None


class GeocodeResult(BaseModel):
    place_id: str
    formatted_address: str
    location: Coordinates


class PlaceSummary(BaseModel):
    place_id: str
    name: str
    location: Coordinates | None = None


class PlaceReview(BaseModel):
    author_name: str
    rating: int
    text: str


class PlaceDetails(BaseModel):
    place_id: str
    name: str
    rating: float | None = None
    phone: str | None = None
    website: str | None = None
    price_level: int | None = None
    opening_hours: list[str] = []
    photo_references: list[str] = []
    reviews: list[PlaceReview] = []


class MapProvider(ABC):
    @abstractmethod
    async def geocode(self, query: str) -> list[GeocodeResult]: ...

    @abstractmethod
    async def find_place(self, name: str, near: Coordinates) -> PlaceSummary | None: ...

    @abstractmethod
    async def place_details(self, place_id: str) -> PlaceDetails | None: ...

    @abstractmethod
    async def travel_estimate(self, origin: Coordinates, destination: Coordinates) -> TravelEstimate:
        """Driving estimate for one origin/destination pair.

        Raises MapProviderError when no estimate can be produced.
        """

    def close(self) -> None:
        return None


def get_map_provider() -> MapProvider:
    from itinerary.config import get_config
    from itinerary.errors import ConfigurationError

    config = get_config()
    api_key = config.google_maps_api_key
    if not api_key:
        raise ConfigurationError("GOOGLE_MAPS_API_KEY not configured")

    from itinerary.maps.google_provider import GoogleMapsProvider

    return GoogleMapsProvider(api_key=api_key, timeout=config.http_timeout_seconds)
