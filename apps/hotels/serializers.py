"""Serializers for the hotel domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Hotel


class HotelSerializer(serializers.ModelSerializer):
    class Meta:
        model = Hotel
        fields = [
            "id",
            "name",
            "address",
            "district",
            "province",
            "postal_code",
            "tel",
            "picture",
            "created_at",
        ]
        read_only_fields = ["id", "created_at"]


class HotelSummarySerializer(serializers.ModelSerializer):
    """Hotel fields embedded into booking responses."""

    class Meta:
        model = Hotel
        fields = ["id", "name", "address", "tel"]
        read_only_fields = fields
