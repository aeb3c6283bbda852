"""Serializers for booking transfers."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.bookings.models import Booking

from .models import Transfer

User = get_user_model()


class TransferSerializer(serializers.ModelSerializer):
    sender = serializers.ReadOnlyField(source="sender_id")
    receiver = serializers.ReadOnlyField(source="receiver_id")
    booking = serializers.ReadOnlyField(source="booking_id")

    class Meta:
        model = Transfer
        fields = [
            "id",
            "sender",
            "receiver",
            "booking",
            "receiver_approval",
            "admin_approval",
            "created_at",
        ]
        read_only_fields = fields


class TransferCreateSerializer(serializers.Serializer):
    """The sender is always the caller, so only these two come from the body."""

    receiver = serializers.PrimaryKeyRelatedField(queryset=User.objects.all())
    booking = serializers.PrimaryKeyRelatedField(queryset=Booking.objects.all())


class TransferUpdateSerializer(serializers.Serializer):
    receiver = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False)
    receiver_approval = serializers.BooleanField(required=False)
    admin_approval = serializers.BooleanField(required=False)


class TransferApprovalSerializer(serializers.Serializer):
    """``"Approved"`` signs the transfer, any other value rejects it."""

    approval = serializers.CharField(allow_blank=True, trim_whitespace=False)
