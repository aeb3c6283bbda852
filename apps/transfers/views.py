"""API views for booking transfers."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore

from apps.bookings.serializers import BookingSerializer
from shared.api.exceptions import get_or_404
from shared.api.responses import EnvelopeMixin, envelope

from . import services
from .models import Transfer
from .serializers import (
    TransferApprovalSerializer,
    TransferCreateSerializer,
    TransferSerializer,
    TransferUpdateSerializer,
)


class IsTransferParticipant(permissions.BasePermission):
    """Sender, receiver and administrators may read; sender and administrators may change."""

    message = "Not authorized to access this transfer"

    def has_object_permission(self, request, view, obj: Transfer):  # type: ignore
        if view.action == "retrieve":
            return services.can_view_transfer(request.user, obj)
        if view.action in {"update", "partial_update", "destroy"}:
            return services.can_manage_transfer(request.user, obj)
        return True


class TransferViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    """Viewset for booking transfers and their approval."""

    queryset = Transfer.objects.select_related("booking").all()
    permission_classes = [permissions.IsAuthenticated, IsTransferParticipant]
    internal_error_message = "Cannot process transfer request"

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return TransferCreateSerializer
        if self.action in {"update", "partial_update"}:
            return TransferUpdateSerializer
        if self.action == "approve":
            return TransferApprovalSerializer
        return TransferSerializer

    def get_queryset(self):  # type: ignore
        if self.action == "list":
            return services.visible_transfers(self.request.user)
        return super().get_queryset()

    def get_object(self):  # type: ignore
        transfer = get_or_404(self.get_queryset(), self.kwargs["pk"], "transfer")
        self.check_object_permissions(self.request, transfer)
        return transfer

    def _outcome_response(self, outcome: services.TransferOutcome):
        if outcome.state == services.COMPLETED:
            booking_data = BookingSerializer(outcome.booking, context=self.get_serializer_context()).data
            return envelope(booking_data, message="Transfer completed")
        if outcome.transfer is not None:
            return envelope(TransferSerializer(outcome.transfer).data, message=outcome.message)
        return envelope(message=outcome.message)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        transfer = services.create_transfer(actor=request.user, **serializer.validated_data)
        return envelope(TransferSerializer(transfer).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        transfer = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        outcome = services.update_transfer(transfer, actor=request.user, changes=serializer.validated_data)
        return self._outcome_response(outcome)

    def perform_destroy(self, instance: Transfer):  # type: ignore
        services.delete_transfer(instance, actor=self.request.user)

    def approve(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        outcome = services.approve_transfer(
            pk,
            actor=request.user,
            approval=serializer.validated_data["approval"],
        )
        if outcome.state == services.COMPLETED:
            return self._outcome_response(outcome)
        # Pending and rejected answers carry only the status message.
        return envelope(message=outcome.message)
