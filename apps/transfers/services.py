"""Transfer workflow.

A transfer moves through a small state machine::

    Pending --(receiver + admin approved)--> Completed  (owner changed, row deleted)
    Pending --(either approver rejects)----> Rejected   (row deleted)

Only ``Pending`` is ever stored. Every function takes the acting user
explicitly as ``actor``.

Approval runs inside one transaction with the transfer row locked, so
two approvers racing on the same transfer are serialized. Completion is
idempotent: the booking changes hands only if this call is the one that
removed the transfer row, and finding the row already gone is success.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Q, QuerySet  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.bookings.models import Booking
from shared.api.exceptions import Forbidden, InvalidInput, NotFound, get_or_404

from .models import Transfer

logger = structlog.get_logger(__name__)

RECEIVER = "receiver"
ADMIN = "admin"

PENDING = "pending"
COMPLETED = "completed"
REJECTED = "rejected"

DUPLICATE_TRANSFER_MESSAGE = "This booking already has a pending transfer."


@dataclass(frozen=True)
class TransferOutcome:
    """Result of a state transition."""

    state: str
    transfer_id: int
    transfer: Transfer | None = None
    booking: Booking | None = None
    waiting_for: str | None = None

    @property
    def message(self) -> str | None:
        if self.state == PENDING:
            return f"Wait for {self.waiting_for} approval"
        if self.state == REJECTED:
            return "Rejected and deleted transfer"
        return None


def _lock_queryset_if_possible(queryset: QuerySet) -> QuerySet:
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


# --- Access rules -----------------------------------------------------------

def visible_transfers(actor) -> QuerySet:
    """Administrators see every transfer, users the ones they take part in."""
    queryset = Transfer.objects.select_related("booking")
    if actor.is_admin():
        return queryset
    return queryset.filter(Q(sender=actor) | Q(receiver=actor))


def can_view_transfer(actor, transfer: Transfer) -> bool:
    return actor.is_admin() or transfer.involves(actor)


def can_manage_transfer(actor, transfer: Transfer) -> bool:
    return actor.is_admin() or transfer.sender_id == actor.pk


def ensure_can_manage_transfer(actor, transfer: Transfer, verb: str) -> None:
    if not can_manage_transfer(actor, transfer):
        raise Forbidden(f"User {actor.pk} is not authorized to {verb} this transfer")


def approver_role(actor, transfer: Transfer) -> str:
    """Resolve who is signing: the receiver or an administrator, nobody else."""
    if actor.pk == transfer.receiver_id:
        return RECEIVER
    if actor.is_admin():
        return ADMIN
    raise Forbidden(f"User {actor.pk} is not allowed to approve this transfer")


# --- Transitions ------------------------------------------------------------

def create_transfer(*, actor, receiver, booking: Booking) -> Transfer:
    if not booking.is_owned_by(actor):
        raise Forbidden(f"User {actor.pk} does not own booking {booking.pk}")
    if receiver.pk == actor.pk:
        raise InvalidInput({"receiver": ["A booking cannot be transferred to its owner."]})
    if Transfer.objects.filter(booking=booking).exists():
        raise InvalidInput({"booking": [DUPLICATE_TRANSFER_MESSAGE]})

    try:
        with transaction.atomic():
            transfer = Transfer.objects.create(sender=actor, receiver=receiver, booking=booking)
    except IntegrityError:
        # lost a race against another transfer of the same booking
        raise InvalidInput({"booking": [DUPLICATE_TRANSFER_MESSAGE]})

    logger.info(
        "transfer.created",
        transfer_id=transfer.pk,
        booking_id=booking.pk,
        sender_id=actor.pk,
        receiver_id=receiver.pk,
    )
    return transfer


def approve_transfer(transfer_id: Any, *, actor, approval: str) -> TransferOutcome:
    """Record one approver's decision and complete the transfer when both agreed."""
    with transaction.atomic():
        transfer = get_or_404(_lock_queryset_if_possible(Transfer.objects.all()), transfer_id, "transfer")
        role = approver_role(actor, transfer)

        if approval != Transfer.APPROVED:
            Transfer.objects.filter(pk=transfer.pk).delete()
            logger.info(
                "transfer.rejected",
                transfer_id=transfer.pk,
                booking_id=transfer.booking_id,
                actor_id=actor.pk,
                role=role,
            )
            return TransferOutcome(state=REJECTED, transfer_id=transfer.pk)

        flag = "receiver_approval" if role == RECEIVER else "admin_approval"
        Transfer.objects.filter(pk=transfer.pk).update(**{flag: True})
        transfer.refresh_from_db()
        logger.info("transfer.approved", transfer_id=transfer.pk, actor_id=actor.pk, role=role)

        if transfer.is_fully_approved:
            booking = complete_transfer(transfer)
            return TransferOutcome(state=COMPLETED, transfer_id=transfer.pk, booking=booking)

        return TransferOutcome(
            state=PENDING,
            transfer_id=transfer.pk,
            transfer=transfer,
            waiting_for=transfer.outstanding_approval,
        )


def complete_transfer(transfer: Transfer) -> Booking:
    """Hand the booking to the receiver and drop the transfer.

    Safe to call more than once for the same transfer: only the call that
    actually deletes the row reassigns the owner.
    """
    if not transfer.is_fully_approved:
        raise InvalidInput("Transfer is not fully approved yet.")

    with transaction.atomic():
        deleted, _ = Transfer.objects.filter(pk=transfer.pk).delete()
        if deleted:
            Booking.objects.filter(pk=transfer.booking_id).update(owner_id=transfer.receiver_id)
            logger.info(
                "transfer.completed",
                transfer_id=transfer.pk,
                booking_id=transfer.booking_id,
                sender_id=transfer.sender_id,
                receiver_id=transfer.receiver_id,
            )
        else:
            logger.info("transfer.already_completed", transfer_id=transfer.pk, booking_id=transfer.booking_id)

    try:
        return Booking.objects.select_related("hotel", "owner").get(pk=transfer.booking_id)
    except Booking.DoesNotExist:
        raise NotFound(f"No booking with the id of {transfer.booking_id}")


def update_transfer(transfer: Transfer, *, actor, changes: dict[str, Any]) -> TransferOutcome:
    """Direct edit by the sender or an administrator.

    The sender may only redirect the transfer to another receiver, which
    withdraws any approval the previous receiver gave. Administrators may
    also set the approval flags; a transfer left fully approved is
    completed on the spot.
    """
    ensure_can_manage_transfer(actor, transfer, verb="update")

    flags = {name: changes[name] for name in ("receiver_approval", "admin_approval") if name in changes}
    if flags and not actor.is_admin():
        raise Forbidden("Only administrators can set approval flags directly")

    with transaction.atomic():
        transfer = get_or_404(_lock_queryset_if_possible(Transfer.objects.all()), transfer.pk, "transfer")
        update_fields = []

        receiver = changes.get("receiver")
        if receiver is not None and receiver.pk != transfer.receiver_id:
            if receiver.pk == transfer.sender_id:
                raise InvalidInput({"receiver": ["A booking cannot be transferred to its owner."]})
            transfer.receiver = receiver
            transfer.receiver_approval = False
            update_fields += ["receiver", "receiver_approval"]

        for name, value in flags.items():
            setattr(transfer, name, value)
            if name not in update_fields:
                update_fields.append(name)

        if update_fields:
            transfer.save(update_fields=update_fields)
        logger.info("transfer.updated", transfer_id=transfer.pk, actor_id=actor.pk, fields=update_fields)

        if transfer.is_fully_approved:
            booking = complete_transfer(transfer)
            return TransferOutcome(state=COMPLETED, transfer_id=transfer.pk, booking=booking)

    return TransferOutcome(
        state=PENDING,
        transfer_id=transfer.pk,
        transfer=transfer,
        waiting_for=transfer.outstanding_approval,
    )


def delete_transfer(transfer: Transfer, *, actor) -> None:
    ensure_can_manage_transfer(actor, transfer, verb="delete")
    transfer_id = transfer.pk
    transfer.delete()
    logger.info("transfer.deleted", transfer_id=transfer_id, actor_id=actor.pk)
