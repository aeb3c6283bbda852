"""Admin registration for hotels."""

from __future__ import annotations

from django.contrib import admin

from .models import Hotel


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ("name", "province", "district", "postal_code", "tel", "created_at")
    list_filter = ("province",)
    search_fields = ("name", "address", "district", "province")
    readonly_fields = ("created_at",)
