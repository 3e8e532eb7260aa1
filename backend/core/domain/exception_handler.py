"""
core.domain.exception_handler: DRF-compatible global exception handler.

Every failure leaving the API is rendered as JSON carrying a
human-readable ``message``:

* request validation errors → 400 ``{"message": "Validation error", "errors": {...}}``
* DRF auth / permission / not-found errors → their status, ``{"message": ...}``
* ``core.domain.exceptions`` → mapped status, ``{"message": ...}``
* anything else → logged with traceback and surfaced as a generic 500

Register in ``settings.py``::

    REST_FRAMEWORK = {
        ...
        'EXCEPTION_HANDLER': 'core.domain.exception_handler.domain_exception_handler',
    }
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_default_handler
from rest_framework.views import set_rollback

from core.domain.exceptions import (
    Conflict,
    DomainError,
    NotFound,
)

logger = logging.getLogger(__name__)

# Domain exception → HTTP status code
_STATUS_MAP: dict[type, int] = {
    NotFound:         404,
    Conflict:         409,
    DomainError:      400,  # catch-all base class last
}

INTERNAL_ERROR_MESSAGE = "Internal server error"
VALIDATION_ERROR_MESSAGE = "Validation error"
NO_TOKEN_MESSAGE = "Unauthorized: No token provided"


def _message_from_detail(detail) -> str:
    """Flatten a DRF ``detail`` payload into a single readable string."""
    if isinstance(detail, dict):
        if "detail" in detail:
            return _message_from_detail(detail["detail"])
        return "; ".join(
            f"{key}: {_message_from_detail(value)}" for key, value in detail.items()
        )
    if isinstance(detail, (list, tuple)):
        return " ".join(_message_from_detail(item) for item in detail)
    return str(detail)


def domain_exception_handler(exc: Exception, context: dict) -> Response:
    """
    DRF exception handler that also handles ``core.domain.exceptions``
    and converts unexpected errors into an opaque 500.

    The default DRF handler is called first so that authentication
    headers (``WWW-Authenticate``) and rollback marking stay intact; its
    body is then reshaped to the ``{"message": ...}`` envelope.
    """
    response = drf_default_handler(exc, context)
    if response is not None:
        if isinstance(exc, ValidationError):
            response.data = {"message": VALIDATION_ERROR_MESSAGE, "errors": exc.detail}
        elif isinstance(exc, NotAuthenticated):
            response.data = {"message": NO_TOKEN_MESSAGE}
        else:
            response.data = {"message": _message_from_detail(response.data)}
        return response

    # Check domain exceptions (most specific first)
    for exc_class, status_code in _STATUS_MAP.items():
        if isinstance(exc, exc_class):
            logger.warning(
                "Domain exception [%s] in %s: %s",
                exc_class.__name__,
                context.get("view", "unknown"),
                exc,
            )
            set_rollback()
            return Response({"message": str(exc)}, status=status_code)

    logger.exception(
        "Unhandled error in %s",
        context.get("view", "unknown"),
        exc_info=exc,
    )
    set_rollback()
    return Response(
        {"message": INTERNAL_ERROR_MESSAGE},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
