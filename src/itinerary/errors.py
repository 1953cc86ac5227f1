"""
Custom exceptions and error handling for the itinerary service.

Defines application-specific exceptions with error codes for consistent
error handling across Lambda functions, the location client and the
mapping integration.

Usage:
    from itinerary.errors import LocationNotFoundError, ErrorCode

    raise LocationNotFoundError("Location 42 does not exist")
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_ID = "INVALID_ID"

    # Lookup errors
    NOT_FOUND = "NOT_FOUND"

    # Storage errors
    STORAGE_ERROR = "STORAGE_ERROR"

    # Remote API errors (client side)
    REQUEST_FAILED = "REQUEST_FAILED"
    NETWORK_ERROR = "NETWORK_ERROR"

    # Mapping provider errors
    ROUTE_UNAVAILABLE = "ROUTE_UNAVAILABLE"
    MAPS_UNAVAILABLE = "MAPS_UNAVAILABLE"

    # System errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_ERROR: "Your request contains invalid information. Please check and try again.",
    ErrorCode.INVALID_REQUEST: "Invalid request body",
    ErrorCode.INVALID_ID: "Invalid location ID",
    ErrorCode.NOT_FOUND: "Location not found",
    ErrorCode.STORAGE_ERROR: "The itinerary could not be saved or loaded. Please try again.",
    ErrorCode.REQUEST_FAILED: "The itinerary service rejected the request.",
    ErrorCode.NETWORK_ERROR: "Unable to reach the itinerary service. Please try again.",
    ErrorCode.ROUTE_UNAVAILABLE: "No driving route is available between these stops.",
    ErrorCode.MAPS_UNAVAILABLE: "The mapping service is temporarily unavailable.",
    ErrorCode.CONFIGURATION_ERROR: "The service is not configured correctly.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again.",
}

HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.INVALID_ID: 400,
    ErrorCode.NOT_FOUND: 404,
}


class ItineraryError(Exception):
    """Base exception for all itinerary errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        self.message = message
        self.code = code
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, USER_MESSAGES[ErrorCode.INTERNAL_ERROR])

    @property
    def status_code(self) -> int:
        return HTTP_STATUS.get(self.code, 500)


class ValidationError(ItineraryError):
    """Request payload failed field validation.

    The message names the offending field and is safe to show the caller.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR):
        super().__init__(message, code=code)

    @property
    def user_message(self) -> str:
        return self.message


class LocationNotFoundError(ItineraryError):
    """No location exists with the requested id."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.NOT_FOUND):
        super().__init__(message, code=code)


class StorageError(ItineraryError):
    """The relational store failed."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.STORAGE_ERROR):
        super().__init__(message, code=code)


class LocationServiceError(ItineraryError):
    """A call to the remote locations API failed.

    Covers both transport failures and non-success envelopes. For the
    latter the server's own error text is the message.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.REQUEST_FAILED):
        super().__init__(message, code=code)

    @property
    def user_message(self) -> str:
        if self.code == ErrorCode.REQUEST_FAILED:
            return self.message
        return super().user_message


class MapProviderError(ItineraryError):
    """The mapping provider could not answer a request."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.MAPS_UNAVAILABLE):
        super().__init__(message, code=code)


class ConfigurationError(ItineraryError):
    """Required configuration is missing."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.CONFIGURATION_ERROR):
        super().__init__(message, code=code)
