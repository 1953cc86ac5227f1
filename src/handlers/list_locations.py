"""GET /locations handler."""

import logging
from typing import Any

from itinerary.clients import get_aurora_client
from itinerary.errors import ItineraryError
from itinerary.services.responses import error_response, failure, success

logger = logging.getLogger(__name__)

_FAILED = "Failed to fetch locations"


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    """Return every location, ordered by day then insertion."""
    try:
        locations = get_aurora_client().list_locations()
    except ItineraryError as e:
        logger.exception("GET /locations failed")
        return error_response(e, _FAILED)
    except Exception:
        logger.exception("GET /locations failed")
        return failure(500, _FAILED)

    data = [loc.model_dump(mode="json") for loc in locations]
    return success(data=data, count=len(data))
