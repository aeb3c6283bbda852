"""Booking domain models."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """A stay at a hotel held by one user.

    The upper bound on ``number_of_nights`` is a business rule
    (``BOOKING_MAX_NIGHTS``) checked by the service layer, not the schema.
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    hotel = models.ForeignKey(
        "hotels.Hotel",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    booking_date = models.DateField(_("booking date"))
    number_of_nights = models.PositiveSmallIntegerField(
        _("number of nights"),
        validators=[MinValueValidator(1)],
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("booking")
        verbose_name_plural = _("bookings")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner", "hotel"], name="booking_owner_hotel_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} at {self.hotel_id} on {self.booking_date}"

    def is_owned_by(self, user) -> bool:
        return self.owner_id == getattr(user, "pk", None)
