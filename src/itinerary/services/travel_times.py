"""Per-day travel time and distance between consecutive itinerary stops."""

import asyncio
import logging
import re
from collections.abc import Sequence

from itinerary.errors import MapProviderError
from itinerary.maps import Coordinates, MapProvider, TravelEstimate
from itinerary.models import AnnotatedLocation, Location

logger = logging.getLogger(__name__)

_CLOCK_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*([ap])\.?\s*m\.?\s*$|^\s*(\d{1,2}):(\d{2})\s*$", re.IGNORECASE)


def _minutes(label: str) -> int | None:
    match = _CLOCK_RE.match(label)
    if match is None:
        return None

    if match.group(3):
        hour, minute = int(match.group(1)), int(match.group(2) or 0)
        if not 1 <= hour <= 12:
            return None
        hour %= 12
        if match.group(3).lower() == "p":
            hour += 12
    else:
        hour, minute = int(match.group(4)), int(match.group(5))
        if hour > 23:
            return None

    if minute > 59:
        return None
    return hour * 60 + minute


def time_sort_key(label: str) -> tuple[int, int, str]:
    """Chronological key for free-form time labels.

    "7:00 AM", "2 pm" and "14:00" sort by clock time. Labels that are not
    clock times ("Dinner", "Evening") sort after every clock time,
    alphabetically among themselves.
    """
    minutes = _minutes(label)
    if minutes is None:
        return (1, 0, label)
    return (0, minutes, "")


def _point(location: Location) -> Coordinates:
    return Coordinates(lat=location.lat, lng=location.lng)


async def _annotate_day(
    stops: list[tuple[int, AnnotatedLocation]], provider: MapProvider
) -> list[tuple[int, TravelEstimate]]:
    """Estimate each consecutive pair in order; a failed pair is skipped.

    Returns the result index of each destination stop with its estimate.
    """
    found = []
    for (_, prev), (curr_index, curr) in zip(stops, stops[1:]):
        try:
            estimate = await provider.travel_estimate(_point(prev), _point(curr))
        except MapProviderError as e:
            logger.warning("No travel estimate from %s to %s: %s", prev.name, curr.name, e)
            continue
        except Exception:
            logger.exception("Error calculating travel time from %s to %s", prev.name, curr.name)
            continue
        found.append((curr_index, estimate))
    return found


async def annotate_travel_times(locations: Sequence[Location], provider: MapProvider) -> list[AnnotatedLocation]:
    """Attach travel time and distance from the previous stop of the same day.

    Stops within a day are ordered by time label and requested one pair at a
    time; separate days are requested concurrently. The first stop of each
    day is never annotated. The result keeps the input order.
    """
    fields = set(Location.model_fields)
    results = [AnnotatedLocation(**loc.model_dump(include=fields)) for loc in locations]

    # Stops are carried with their position in the input, so duplicates of
    # the same place are never confused.
    by_day: dict[str, list[tuple[int, AnnotatedLocation]]] = {}
    for index, loc in enumerate(results):
        by_day.setdefault(loc.day, []).append((index, loc))
    for stops in by_day.values():
        stops.sort(key=lambda pair: time_sort_key(pair[1].time))

    per_day = await asyncio.gather(*(_annotate_day(stops, provider) for stops in by_day.values() if len(stops) > 1))

    for estimates in per_day:
        for idx, estimate in estimates:
            results[idx] = results[idx].model_copy(
                update={
                    "travel_time_from_previous": estimate.duration_text,
                    "distance_from_previous": estimate.distance_text,
                }
            )
    return results


def annotate_travel_times_sync(locations: Sequence[Location], provider: MapProvider) -> list[AnnotatedLocation]:
    return asyncio.run(annotate_travel_times(locations, provider))
