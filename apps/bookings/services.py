"""Domain services for the booking store.

Every operation receives the acting user explicitly (``actor``); nothing
here reads request state.
"""

from __future__ import annotations

from datetime import date
from typing import Any, TYPE_CHECKING

import structlog
from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import QuerySet  # type: ignore
from django.utils import timezone  # type: ignore

from shared.api.exceptions import Forbidden, InvalidInput

from .models import Booking

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.hotels.models import Hotel

logger = structlog.get_logger(__name__)

BOOKING_DATE_MESSAGE = "The booking date should be after today."
BOOKING_DATE_CHANGE_MESSAGE = "Cannot change booking date to be before today."


def nights_message() -> str:
    return (
        f"Number of nights should be between {settings.BOOKING_MIN_NIGHTS} "
        f"and {settings.BOOKING_MAX_NIGHTS}."
    )


def is_after_today(value: date) -> bool:
    """Today itself does not count."""
    return value > timezone.localdate()


def ensure_booking_date_after_today(value: date, message: str = BOOKING_DATE_MESSAGE) -> date:
    if not is_after_today(value):
        raise InvalidInput(message)
    return value


def ensure_nights_within_limit(value: int) -> int:
    if value < settings.BOOKING_MIN_NIGHTS or value > settings.BOOKING_MAX_NIGHTS:
        raise InvalidInput(nights_message())
    return value


def can_manage_booking(actor, booking: Booking) -> bool:
    if not getattr(actor, "is_authenticated", False):
        return False
    return actor.is_admin() or booking.is_owned_by(actor)


def ensure_can_manage_booking(actor, booking: Booking, verb: str = "access") -> None:
    if not can_manage_booking(actor, booking):
        raise Forbidden(f"User {actor.pk} is not authorized to {verb} this booking")


def visible_bookings(actor, hotel_id: int | None = None) -> QuerySet:
    """Administrators see every booking, everyone else only their own."""
    queryset = Booking.objects.select_related("hotel", "owner")
    if not actor.is_admin():
        queryset = queryset.filter(owner=actor)
    if hotel_id is not None:
        queryset = queryset.filter(hotel_id=hotel_id)
    return queryset


def create_booking(
    *,
    actor,
    hotel: "Hotel",
    booking_date: date,
    number_of_nights: int,
) -> Booking:
    ensure_booking_date_after_today(booking_date)
    ensure_nights_within_limit(number_of_nights)

    booking = Booking.objects.create(
        owner=actor,
        hotel=hotel,
        booking_date=booking_date,
        number_of_nights=number_of_nights,
    )
    logger.info(
        "booking.created",
        booking_id=booking.pk,
        hotel_id=hotel.pk,
        owner_id=actor.pk,
        booking_date=str(booking_date),
    )
    transaction.on_commit(lambda: dispatch_owner_lookup(booking.pk))
    return booking


def dispatch_owner_lookup(booking_id: int) -> None:
    """Fire-and-forget; failures never reach the caller."""
    from .tasks import lookup_booking_owner  # local import to avoid circular

    try:
        # Publish once; an unreachable broker fails fast instead of retrying.
        lookup_booking_owner.apply_async(args=[booking_id], retry=False)
    except Exception:
        logger.warning("booking.owner_lookup_dispatch_failed", booking_id=booking_id, exc_info=True)


def update_booking(booking: Booking, *, actor, changes: dict[str, Any]) -> Booking:
    ensure_can_manage_booking(actor, booking, verb="update")

    if changes.get("booking_date") is not None:
        ensure_booking_date_after_today(changes["booking_date"], BOOKING_DATE_CHANGE_MESSAGE)
    if changes.get("number_of_nights") is not None:
        ensure_nights_within_limit(changes["number_of_nights"])

    update_fields = []
    for field in ("booking_date", "number_of_nights"):
        if field in changes:
            setattr(booking, field, changes[field])
            update_fields.append(field)
    if update_fields:
        booking.save(update_fields=update_fields)

    logger.info("booking.updated", booking_id=booking.pk, actor_id=actor.pk, fields=update_fields)
    return booking


def delete_booking(booking: Booking, *, actor) -> None:
    ensure_can_manage_booking(actor, booking, verb="delete")
    booking_id = booking.pk
    booking.delete()
    logger.info("booking.deleted", booking_id=booking_id, actor_id=actor.pk)
