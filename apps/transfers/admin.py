"""Admin registration for transfers."""

from __future__ import annotations

from django.contrib import admin

from .models import Transfer


@admin.register(Transfer)
class TransferAdmin(admin.ModelAdmin):
    list_display = ("id", "booking", "sender", "receiver", "receiver_approval", "admin_approval", "created_at")
    list_filter = ("receiver_approval", "admin_approval")
    search_fields = ("sender__email", "receiver__email")
    readonly_fields = ("created_at",)
