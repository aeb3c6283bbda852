"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .models import Booking

logger = logging.getLogger(__name__)


@shared_task(name="bookings.lookup_booking_owner", ignore_result=True)
def lookup_booking_owner(booking_id: int) -> None:
    """
    Best-effort lookup of the user who just created a booking.

    Runs detached from the request that created the booking. Nothing
    depends on its outcome, so every failure is logged and swallowed.
    """
    try:
        booking = Booking.objects.select_related("owner").get(pk=booking_id)
    except Booking.DoesNotExist:
        logger.warning("Booking %s vanished before its owner could be looked up", booking_id)
        return
    except Exception:
        logger.exception("Owner lookup for booking %s failed", booking_id)
        return

    logger.info("Booking %s belongs to user %s", booking.pk, booking.owner.email)
