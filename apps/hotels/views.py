"""API views for the hotel domain."""

from __future__ import annotations

import structlog
from rest_framework import permissions, viewsets  # type: ignore

from shared.api.responses import EnvelopeMixin

from .models import Hotel
from .serializers import HotelSerializer

logger = structlog.get_logger(__name__)


class IsAdminOrReadOnly(permissions.BasePermission):
    """Anyone may browse hotels, only administrators may change them."""

    def has_permission(self, request, view):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        return bool(user.is_authenticated and user.is_admin())


class HotelViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    """Viewset for the hotel catalogue."""

    queryset = Hotel.objects.all()
    serializer_class = HotelSerializer
    permission_classes = [IsAdminOrReadOnly]
    filterset_fields = ["province", "district"]
    internal_error_message = "Cannot process hotel request"

    def perform_create(self, serializer):  # type: ignore
        hotel = serializer.save()
        logger.info("hotel.created", hotel_id=hotel.pk, actor_id=self.request.user.pk)

    def perform_destroy(self, instance: Hotel):  # type: ignore
        booking_count = instance.bookings.count()
        hotel_id = instance.pk
        instance.delete()
        logger.info(
            "hotel.deleted",
            hotel_id=hotel_id,
            actor_id=self.request.user.pk,
            cascaded_bookings=booking_count,
        )
