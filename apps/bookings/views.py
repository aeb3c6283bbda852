"""API views for the booking domain."""

from __future__ import annotations

from collections.abc import Mapping

from rest_framework import permissions, status, viewsets  # type: ignore

from apps.hotels.models import Hotel
from shared.api.exceptions import InvalidInput, get_or_404
from shared.api.responses import EnvelopeMixin, envelope

from . import services
from .models import Booking
from .serializers import BookingSerializer, BookingWriteSerializer


class IsBookingOwnerOrAdmin(permissions.BasePermission):
    """Only the booking owner and administrators may touch a booking."""

    message = "Not authorized to access this booking"

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        return services.can_manage_booking(request.user, obj)


class BookingViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    """Viewset for creating and managing bookings."""

    queryset = Booking.objects.select_related("hotel", "owner").all()
    permission_classes = [permissions.IsAuthenticated, IsBookingOwnerOrAdmin]
    filterset_fields = ["hotel"]
    internal_error_message = "Cannot process booking request"

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return BookingWriteSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        if self.action == "list":
            return services.visible_bookings(self.request.user, self.kwargs.get("hotel_id"))
        # Single-object actions see every booking so that a foreign one
        # answers 403 rather than 404.
        return super().get_queryset()

    def get_object(self):  # type: ignore
        booking = get_or_404(self.get_queryset(), self.kwargs["pk"], "booking")
        self.check_object_permissions(self.request, booking)
        return booking

    def _resolve_hotel(self) -> Hotel:
        hotel_id = self.kwargs.get("hotel_id")
        if hotel_id is None and isinstance(self.request.data, Mapping):
            hotel_id = self.request.data.get("hotel")
        if hotel_id in (None, ""):
            raise InvalidInput({"hotel": ["A hotel is required."]})
        return get_or_404(Hotel.objects.all(), hotel_id, "hotel")

    def create(self, request, *args, **kwargs):  # type: ignore
        hotel = self._resolve_hotel()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.create_booking(
            actor=request.user,
            hotel=hotel,
            **serializer.validated_data,
        )
        data = BookingSerializer(booking, context=self.get_serializer_context()).data
        return envelope(data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        # PUT behaves like PATCH: only the supplied fields change.
        booking = self.get_object()
        serializer = self.get_serializer(booking, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        booking = services.update_booking(
            booking,
            actor=request.user,
            changes=serializer.validated_data,
        )
        return envelope(BookingSerializer(booking, context=self.get_serializer_context()).data)

    def perform_destroy(self, instance: Booking):  # type: ignore
        services.delete_booking(instance, actor=self.request.user)
