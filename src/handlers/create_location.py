"""POST /locations handler."""

import logging
from typing import Any

from itinerary.clients import get_aurora_client
from itinerary.errors import ItineraryError
from itinerary.services.responses import error_response, failure, parse_json_body, success
from itinerary.validation import parse_create

logger = logging.getLogger(__name__)

_FAILED = "Failed to create location"


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    try:
        payload = parse_create(parse_json_body(event))
        location = get_aurora_client().create_location(payload)
    except ItineraryError as e:
        if e.status_code >= 500:
            logger.exception("POST /locations failed")
        else:
            logger.info("POST /locations rejected: %s", e.message)
        return error_response(e, _FAILED)
    except Exception:
        logger.exception("POST /locations failed")
        return failure(500, _FAILED)

    logger.info("Created location %s", location.id)
    return success(201, data=location.model_dump(mode="json"))
