import json
from datetime import datetime, timezone

import pytest

from itinerary.errors import ErrorCode, LocationNotFoundError, StorageError, ValidationError
from itinerary.services.responses import error_response, failure, parse_json_body, success


def test_success_envelope():
    response = success(201, data={"id": 1}, when=datetime(2026, 10, 1, tzinfo=timezone.utc))

    assert response["statusCode"] == 201
    assert response["headers"] == {"Content-Type": "application/json"}
    body = json.loads(response["body"])
    assert body["success"] is True
    assert body["data"] == {"id": 1}
    assert body["when"].startswith("2026-10-01")


def test_failure_envelope_keeps_non_ascii():
    response = failure(400, "Nom invàlid")

    assert "Nom invàlid" in response["body"]
    assert json.loads(response["body"]) == {"success": False, "error": "Nom invàlid"}


def test_error_response_for_client_errors():
    response = error_response(ValidationError("Day must be one of: day1, day2, day3, day4, day5"), "Failed")
    assert response["statusCode"] == 400
    assert json.loads(response["body"])["error"] == "Day must be one of: day1, day2, day3, day4, day5"

    response = error_response(LocationNotFoundError("Location 5 does not exist"), "Failed")
    assert response["statusCode"] == 404
    assert json.loads(response["body"])["error"] == "Location not found"


def test_error_response_hides_server_details():
    response = error_response(StorageError("password authentication failed"), "Failed to fetch locations")

    assert response["statusCode"] == 500
    assert json.loads(response["body"])["error"] == "Failed to fetch locations"


def test_parse_json_body():
    assert parse_json_body({"body": '{"name": "Sóller"}'}) == {"name": "Sóller"}


@pytest.mark.parametrize("event", [{}, {"body": None}, {"body": "{"}, {"body": "!!", "isBase64Encoded": True}])
def test_parse_json_body_rejects_bad_input(event):
    with pytest.raises(ValidationError) as exc_info:
        parse_json_body(event)
    assert exc_info.value.code == ErrorCode.INVALID_REQUEST
