"""DELETE /locations/{id} handler."""

import logging
from typing import Any

from itinerary.clients import get_aurora_client
from itinerary.errors import ItineraryError
from itinerary.services.responses import error_response, failure, success
from itinerary.validation import parse_location_id

logger = logging.getLogger(__name__)

_FAILED = "Failed to delete location"


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    raw_id = (event.get("pathParameters") or {}).get("id")
    try:
        location_id = parse_location_id(raw_id)
        get_aurora_client().delete_location(location_id)
    except ItineraryError as e:
        if e.status_code >= 500:
            logger.exception("DELETE /locations/%s failed", raw_id)
        else:
            logger.info("DELETE /locations/%s rejected: %s", raw_id, e.message)
        return error_response(e, _FAILED)
    except Exception:
        logger.exception("DELETE /locations/%s failed", raw_id)
        return failure(500, _FAILED)

    logger.info("Deleted location %s", location_id)
    return success(message="Location deleted successfully")
