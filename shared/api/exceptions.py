"""
Error Taxonomy

The API distinguishes four kinds of failure:

- NotFound      -> 404  (``rest_framework.exceptions.NotFound``, ``Http404``)
- Forbidden     -> 403  (``rest_framework.exceptions.PermissionDenied``)
- InvalidInput  -> 400  (``rest_framework.exceptions.ValidationError``)
- Internal      -> 500  (anything else, database errors included)

``envelope_exception_handler`` is installed as DRF's ``EXCEPTION_HANDLER``
and renders all of them in the response envelope. Internal errors are
logged with their traceback and answered with a generic message; the
detail never reaches the client.
"""

from __future__ import annotations

from typing import Any

import structlog
from django.core.exceptions import ObjectDoesNotExist, ValidationError as DjangoValidationError  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler, set_rollback  # type: ignore

from .responses import envelope_body

logger = structlog.get_logger(__name__)

DEFAULT_INTERNAL_MESSAGE = "Something went wrong, please try again later."

# Keys whose messages are shown without a field prefix
_UNPREFIXED_KEYS = {"detail", "non_field_errors"}

__all__ = [
    "Forbidden",
    "InvalidInput",
    "NotFound",
    "envelope_exception_handler",
    "flatten_error_detail",
    "get_or_404",
]

Forbidden = PermissionDenied
InvalidInput = ValidationError


def flatten_error_detail(detail: Any, prefix: str | None = None) -> list[str]:
    """Collapse DRF's nested error structure into flat messages."""
    if isinstance(detail, dict):
        messages: list[str] = []
        for key, value in detail.items():
            child_prefix = None if key in _UNPREFIXED_KEYS else str(key)
            if prefix and child_prefix:
                child_prefix = f"{prefix}.{child_prefix}"
            messages.extend(flatten_error_detail(value, child_prefix or prefix))
        return messages
    if isinstance(detail, (list, tuple)):
        messages = []
        for item in detail:
            messages.extend(flatten_error_detail(item, prefix))
        return messages
    text = str(detail)
    return [f"{prefix}: {text}" if prefix else text]


def envelope_exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    response = exception_handler(exc, context)
    view = context.get("view")

    if response is None:
        request = context.get("request")
        set_rollback()
        logger.exception(
            "api.internal_error",
            view=view.__class__.__name__ if view is not None else None,
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
        message = getattr(view, "internal_error_message", DEFAULT_INTERNAL_MESSAGE)
        return Response(
            envelope_body(success=False, message=message),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    message = "; ".join(flatten_error_detail(response.data))
    if response.status_code >= 500:
        logger.error("api.server_error", status=response.status_code, message=message)
    response.data = envelope_body(success=False, message=message)
    return response


def get_or_404(queryset, pk: Any, label: str):
    """Fetch one row by primary key or raise NotFound naming the resource."""
    try:
        return queryset.get(pk=pk)
    except (ObjectDoesNotExist, TypeError, ValueError, DjangoValidationError):
        raise NotFound(f"No {label} with the id of {pk}")
