"""
API exception handlers.

This module renders every failure as the error body the clients consume:
{"status": ..., "type": ..., "message": ..., "details": ...}.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    DataDeletionError,
    DomainException,
    InvalidQueryError,
    NotFoundError,
    UpdateConflictError,
)

logger = logging.getLogger(__name__)

DOMAIN_STATUS_CODES = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (UpdateConflictError, status.HTTP_409_CONFLICT),
    (DataDeletionError, status.HTTP_409_CONFLICT),
    (InvalidQueryError, status.HTTP_400_BAD_REQUEST),
)


def error_body(status_code: int, error_type: str, message: str, details: str = "") -> Dict[str, Any]:
    """Build the error payload returned for every failed request."""
    return {
        "status": status_code,
        "type": error_type,
        "message": message,
        "details": details,
    }


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, ValidationError):
        response = _handle_validation_error(exc, trace_id)
    elif isinstance(exc, Http404):
        response = Response(
            error_body(
                status.HTTP_404_NOT_FOUND,
                "NotFound",
                "Resource could not be found.",
                "Please verify the requested URL is correct.",
            ),
            status=status.HTTP_404_NOT_FOUND,
        )
    elif isinstance(exc, APIException):
        response = _handle_api_exception(exc, context)
    else:
        response = _handle_unexpected_exception(exc, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status.HTTP_400_BAD_REQUEST
    for exception_class, code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exception_class):
            status_code = code
            break

    logger.warning(
        "Domain exception: %s - %s", exc.error_type, exc.message, extra={"trace_id": trace_id}
    )
    return Response(
        error_body(status_code, exc.error_type, exc.message, exc.details),
        status=status_code,
    )


def _handle_validation_error(exc: ValidationError, trace_id: Optional[str]) -> Response:
    """Flatten serializer errors into the details string."""
    details = _flatten_errors(exc.detail)
    logger.info("Validation failed: %s", details, extra={"trace_id": trace_id})
    return Response(
        error_body(
            status.HTTP_400_BAD_REQUEST,
            "ValidationError",
            "The submitted data is invalid.",
            details,
        ),
        status=status.HTTP_400_BAD_REQUEST,
    )


def _flatten_errors(detail: Any, prefix: str = "") -> str:
    if isinstance(detail, dict):
        parts = [
            _flatten_errors(value, f"{prefix}.{key}" if prefix else str(key))
            for key, value in detail.items()
        ]
        return " ".join(part for part in parts if part)
    if isinstance(detail, list):
        return " ".join(_flatten_errors(item, prefix) for item in detail)
    return f"{prefix}: {detail}" if prefix else str(detail)


def _handle_api_exception(exc: APIException, context: Dict[str, Any]) -> Response:
    """Re-shape DRF's own exceptions (method not allowed, parse errors, ...)."""
    response = exception_handler(exc, context)
    status_code = response.status_code if response else exc.status_code
    error_type = "ValidationError" if status_code < 500 else "InternalServerError"
    body = error_body(status_code, error_type, str(exc.detail))
    if response is None:
        return Response(body, status=status_code)
    response.data = body
    return response


def _handle_unexpected_exception(exc: Exception, trace_id: Optional[str]) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "InternalServerError",
            "An internal error occurred.",
            "Please try again. If the problem persists, contact support.",
        ),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
