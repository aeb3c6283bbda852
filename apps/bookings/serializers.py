"""Serializers for the booking domain."""

from __future__ import annotations

from datetime import date

from rest_framework import serializers  # type: ignore

from apps.hotels.serializers import HotelSummarySerializer

from .models import Booking
from .services import (
    BOOKING_DATE_CHANGE_MESSAGE,
    BOOKING_DATE_MESSAGE,
    ensure_booking_date_after_today,
    ensure_nights_within_limit,
)


class BookingSerializer(serializers.ModelSerializer):
    """Booking as returned by the API, with a short hotel summary."""

    owner = serializers.ReadOnlyField(source="owner.id")
    hotel = HotelSummarySerializer(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "booking_date",
            "number_of_nights",
            "owner",
            "hotel",
            "created_at",
        ]
        read_only_fields = fields


class BookingWriteSerializer(serializers.ModelSerializer):
    """Input for create and update. Owner and hotel never come from the body."""

    booking_date = serializers.DateField()
    number_of_nights = serializers.IntegerField()

    class Meta:
        model = Booking
        fields = ["booking_date", "number_of_nights"]

    def validate_booking_date(self, value: date) -> date:
        message = BOOKING_DATE_MESSAGE if self.instance is None else BOOKING_DATE_CHANGE_MESSAGE
        return ensure_booking_date_after_today(value, message)

    def validate_number_of_nights(self, value: int) -> int:
        return ensure_nights_within_limit(value)
