import asyncio
import logging
import threading
from typing import Any

import requests

from itinerary.errors import ErrorCode, MapProviderError

from .interface import (
    Coordinates,
    GeocodeResult,
    MapProvider,
    PlaceDetails,
    PlaceReview,
    PlaceSummary,
    TravelEstimate,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://maps.googleapis.com/maps/api"

_DETAIL_FIELDS = "name,rating,reviews,photos,formatted_phone_number,website,opening_hours,price_level"
_NEARBY_RADIUS_METERS = 100


def _latlng(point: Coordinates) -> str:
    return f"{point.lat},{point.lng}"


def _coordinates(result: dict[str, Any]) -> Coordinates | None:
    location = (result.get("geometry") or {}).get("location")
    if not location:
        return None
    return Coordinates(lat=location["lat"], lng=location["lng"])


class GoogleMapsProvider(MapProvider):
    """Google Maps web services behind the MapProvider interface.

    Calls are blocking HTTP requests, so each one is run in a worker thread
    to keep the event loop free for other day chains. Each worker thread
    gets its own ``requests.Session``, since sessions are not thread safe.
    A session passed in by the caller is shared as is and left open on
    ``close()``. Place lookups are memoised for the life of the provider.
    """

    def __init__(self, api_key: str, session: requests.Session | None = None, timeout: float | None = None):
        self._api_key = api_key
        self._shared_session = session
        self._local = threading.local()
        self._owned_sessions: list[requests.Session] = []
        self._sessions_lock = threading.Lock()
        self._timeout = timeout
        self._places_cache: dict[str, Any] = {}

    def _session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._sessions_lock:
                self._owned_sessions.append(session)
        return session

    def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._session().get(
                f"{BASE_URL}/{path}/json",
                params={**params, "key": self._api_key},
                timeout=self._timeout,
            )
            response.raise_for_status()
            body: dict[str, Any] = response.json()
        except (requests.RequestException, ValueError) as e:
            raise MapProviderError(f"Google Maps {path} request failed: {e}") from e

        status = body.get("status")
        if status not in ("OK", "ZERO_RESULTS"):
            detail = body.get("error_message")
            message = f"Google Maps {path} returned {status}"
            raise MapProviderError(f"{message}: {detail}" if detail else message)
        return body

    async def _call(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        return await asyncio.to_thread(self._get, path, params)

    async def geocode(self, query: str) -> list[GeocodeResult]:
        body = await self._call("geocode", {"address": query})
        results = []
        for result in body.get("results", []):
            location = _coordinates(result)
            if location is None:
                continue
            results.append(
                GeocodeResult(
                    place_id=result["place_id"],
                    formatted_address=result.get("formatted_address", ""),
                    location=location,
                )
            )
        return results

    async def find_place(self, name: str, near: Coordinates) -> PlaceSummary | None:
        cache_key = f"nearby_{name.strip().lower()}_{near.lat},{near.lng}"
        if cache_key in self._places_cache:
            return self._places_cache[cache_key]

        body = await self._call(
            "place/nearbysearch",
            {
                "location": _latlng(near),
                "radius": _NEARBY_RADIUS_METERS,
                "type": "tourist_attraction",
                "keyword": name,
            },
        )
        results = body.get("results", [])
        if not results:
            return None

        wanted = name.lower()
        best = results[0]
        for result in results:
            candidate = result.get("name", "").lower()
            if wanted in candidate or candidate in wanted:
                best = result
                break

        place = PlaceSummary(place_id=best["place_id"], name=best.get("name", name), location=_coordinates(best))
        self._places_cache[cache_key] = place
        return place

    async def place_details(self, place_id: str) -> PlaceDetails | None:
        cache_key = f"details_{place_id}"
        if cache_key in self._places_cache:
            return self._places_cache[cache_key]

        body = await self._call("place/details", {"place_id": place_id, "fields": _DETAIL_FIELDS})
        result = body.get("result")
        if not result:
            return None

        details = PlaceDetails(
            place_id=place_id,
            name=result.get("name", ""),
            rating=result.get("rating"),
            phone=result.get("formatted_phone_number"),
            website=result.get("website"),
            price_level=result.get("price_level"),
            opening_hours=(result.get("opening_hours") or {}).get("weekday_text", []),
            photo_references=[p["photo_reference"] for p in result.get("photos", []) if "photo_reference" in p],
            reviews=[
                PlaceReview(author_name=r.get("author_name", ""), rating=r.get("rating", 0), text=r.get("text", ""))
                for r in result.get("reviews", [])
            ],
        )
        self._places_cache[cache_key] = details
        return details

    async def travel_estimate(self, origin: Coordinates, destination: Coordinates) -> TravelEstimate:
        body = await self._call(
            "distancematrix",
            {
                "origins": _latlng(origin),
                "destinations": _latlng(destination),
                "mode": "driving",
                "units": "metric",
            },
        )
        try:
            element = body["rows"][0]["elements"][0]
        except (KeyError, IndexError) as e:
            raise MapProviderError("Distance matrix response had no elements", code=ErrorCode.ROUTE_UNAVAILABLE) from e

        if element.get("status") != "OK":
            raise MapProviderError(
                f"No driving estimate: {element.get('status', 'UNKNOWN')}",
                code=ErrorCode.ROUTE_UNAVAILABLE,
            )

        return TravelEstimate(
            duration_text=element["duration"]["text"],
            distance_text=element["distance"]["text"],
            duration_seconds=element["duration"].get("value"),
            distance_meters=element["distance"].get("value"),
        )

    def close(self) -> None:
        with self._sessions_lock:
            sessions, self._owned_sessions = self._owned_sessions, []
        for session in sessions:
            session.close()
