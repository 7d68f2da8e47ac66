"""
Error taxonomy for the CitizenVote API.

Services raise plain Django exceptions (ValidationError, DoesNotExist) and let
database errors propagate. ``api_exception_handler`` maps them onto HTTP
statuses and the ``{"ok": false, "msg": ...}`` body every client expects.
"""

from typing import Any

from django.core.exceptions import ObjectDoesNotExist
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError
from django.http import HttpRequest, JsonResponse
from loguru import logger
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound
from rest_framework.response import Response
from rest_framework.views import exception_handler


class NotFoundError(NotFound):
    """A referenced entity does not exist."""

    default_detail = "Not found"


class StoreError(APIException):
    """The database failed while serving the request."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Database error"
    default_code = "store_error"


def _flatten_detail(detail: Any) -> str:
    """Collapse DRF error details (str, list or dict) into one message."""
    if isinstance(detail, dict):
        parts = []
        for field, value in detail.items():
            message = _flatten_detail(value)
            if field in ("detail", "non_field_errors", "__all__"):
                parts.append(message)
            else:
                parts.append(f"{field}: {message}")
        return "; ".join(parts)
    if isinstance(detail, list | tuple):
        return "; ".join(_flatten_detail(item) for item in detail)
    return str(detail)


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """
    DRF exception handler producing ``{"ok": false, "msg": ...}`` bodies.

    Mapping:
        - django ValidationError → 400, messages joined verbatim
        - ObjectDoesNotExist / NotFound → 404
        - DatabaseError → 500 with the driver message
        - any other APIException → its own status (401, 403, 405, ...)
    """
    view = context.get("view")
    view_name = view.__class__.__name__ if view else "unknown"

    if isinstance(exc, DjangoValidationError):
        message = "; ".join(exc.messages)
        logger.warning(f"{view_name}: validation error: {message}")
        return Response(
            {"ok": False, "msg": message}, status=status.HTTP_400_BAD_REQUEST
        )

    if isinstance(exc, ObjectDoesNotExist):
        logger.warning(f"{view_name}: not found: {exc}")
        exc = NotFoundError(str(exc) or None)
    elif isinstance(exc, DatabaseError):
        logger.error(f"{view_name}: database error: {exc}")
        exc = StoreError(str(exc) or None)

    response = exception_handler(exc, context)
    if response is None:
        return None

    detail = exc.detail if isinstance(exc, APIException) else response.data
    response.data = {"ok": False, "msg": _flatten_detail(detail)}
    return response


def api_not_found(request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
    """Fallback for unknown paths under /api/."""
    return JsonResponse({"ok": False, "msg": "Not found"}, status=404)
