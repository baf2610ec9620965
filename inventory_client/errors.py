"""
Error payloads returned by the inventory API.

Every failed response carries {status, type, message, details}; the
payload is validated into one model per error type.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

SERVER_ERROR_DETAILS = "Please try refreshing the page. If the problem persists, contact support."


class ErrorPayloadBase(BaseModel):
    status: int
    message: str
    details: str = ""


class NotFoundError(ErrorPayloadBase):
    type: Literal["NotFound"] = "NotFound"


class UpdateConflictError(ErrorPayloadBase):
    type: Literal["UpdateConflict"] = "UpdateConflict"


class DataDeletionError(ErrorPayloadBase):
    type: Literal["DataDeletionError"] = "DataDeletionError"


class ValidationFailedError(ErrorPayloadBase):
    type: Literal["ValidationError"] = "ValidationError"


class InternalServerError(ErrorPayloadBase):
    type: Literal["InternalServerError"] = "InternalServerError"
    status: int = 500


ErrorPayload = Annotated[
    Union[
        NotFoundError,
        UpdateConflictError,
        DataDeletionError,
        ValidationFailedError,
        InternalServerError,
    ],
    Field(discriminator="type"),
]

_error_adapter = TypeAdapter(ErrorPayload)


class AppLoadError(Exception):
    """Raised when the initial data load fails."""

    def __init__(self, error: ErrorPayloadBase):
        super().__init__(error.message)
        self.error = error


def internal_error(message: str, details: str = SERVER_ERROR_DETAILS) -> InternalServerError:
    """Payload recorded when a request never produced a usable response."""
    return InternalServerError(message=message, details=details)


def parse_error(body: Any, status: int, fallback_message: str) -> ErrorPayloadBase:
    """
    Validate an error response body.

    Args:
        body: Decoded JSON body, or None if it was not JSON
        status: HTTP status code of the response
        fallback_message: Message used when the body is not an error payload

    Returns:
        The matching error model; InternalServerError for anything unrecognized
    """
    try:
        return _error_adapter.validate_python(body)
    except ValidationError:
        return InternalServerError(
            status=status if status >= 400 else 500,
            message=fallback_message,
            details=SERVER_ERROR_DETAILS,
        )
