"""Booking transfer models."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Transfer(models.Model):
    """Pending handoff of a booking from ``sender`` to ``receiver``.

    Only pending transfers are stored. Completion and rejection both
    delete the row, so at most one transfer per booking can exist.
    """

    APPROVED = "Approved"

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_transfers",
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_transfers",
    )
    booking = models.OneToOneField(
        "bookings.Booking",
        on_delete=models.CASCADE,
        related_name="transfer",
    )
    receiver_approval = models.BooleanField(_("approved by receiver"), default=False)
    admin_approval = models.BooleanField(_("approved by admin"), default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("transfer")
        verbose_name_plural = _("transfers")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Transfer of booking {self.booking_id}: {self.sender_id} -> {self.receiver_id}"

    @property
    def is_fully_approved(self) -> bool:
        return self.receiver_approval and self.admin_approval

    @property
    def outstanding_approval(self) -> str | None:
        """Which approver is still missing, ``None`` once both signed."""
        if not self.admin_approval:
            return "admin"
        if not self.receiver_approval:
            return "receiver"
        return None

    def involves(self, user) -> bool:
        return getattr(user, "pk", None) in (self.sender_id, self.receiver_id)
