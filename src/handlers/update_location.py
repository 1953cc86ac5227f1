"""PUT /locations/{id} handler."""

import logging
from typing import Any

from itinerary.clients import get_aurora_client
from itinerary.errors import ItineraryError
from itinerary.services.responses import error_response, failure, parse_json_body, success
from itinerary.validation import parse_location_id, parse_update

logger = logging.getLogger(__name__)

_FAILED = "Failed to update location"


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    """Apply a partial update; fields absent from the body are left unchanged."""
    raw_id = (event.get("pathParameters") or {}).get("id")
    try:
        location_id = parse_location_id(raw_id)
        update = parse_update(parse_json_body(event))
        location = get_aurora_client().update_location(location_id, update)
    except ItineraryError as e:
        if e.status_code >= 500:
            logger.exception("PUT /locations/%s failed", raw_id)
        else:
            logger.info("PUT /locations/%s rejected: %s", raw_id, e.message)
        return error_response(e, _FAILED)
    except Exception:
        logger.exception("PUT /locations/%s failed", raw_id)
        return failure(500, _FAILED)

    return success(data=location.model_dump(mode="json"))
