"""
Response Envelope

Every resource endpoint answers with the same JSON shape:

    {"success": bool, "data": ..., "count": int, "message": str}

``data``, ``count`` and ``message`` are present only when they carry
something.
"""

from __future__ import annotations

from typing import Any

from rest_framework import status as http_status  # type: ignore
from rest_framework.response import Response  # type: ignore


def envelope_body(
    data: Any = None,
    *,
    success: bool = True,
    count: int | None = None,
    message: str | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"success": success}
    if data is not None:
        body["data"] = data
    if count is not None:
        body["count"] = count
    if message is not None:
        body["message"] = message
    return body


def envelope(
    data: Any = None,
    *,
    count: int | None = None,
    message: str | None = None,
    status: int = http_status.HTTP_200_OK,
    headers: dict[str, str] | None = None,
) -> Response:
    """Successful response wrapped in the envelope."""
    return Response(
        envelope_body(data, count=count, message=message),
        status=status,
        headers=headers,
    )


class EnvelopeMixin:
    """
    Wraps the stock ``ModelViewSet`` actions into the envelope.

    Lists get ``count``, creates answer 201, deletes answer ``data: {}``.
    """

    def list(self, request, *args, **kwargs):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return envelope(serializer.data, count=len(serializer.data))

    def retrieve(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(self.get_object())
        return envelope(serializer.data)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        headers = self.get_success_headers(serializer.data)
        return envelope(serializer.data, status=http_status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return envelope(serializer.data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        self.perform_destroy(self.get_object())
        return envelope({})
