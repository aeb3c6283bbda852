"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "hotel",
        "owner",
        "booking_date",
        "number_of_nights",
        "created_at",
    )
    list_filter = ("hotel", "booking_date")
    search_fields = ("hotel__name", "owner__email")
    readonly_fields = ("created_at",)
