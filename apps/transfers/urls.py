"""URL routing for booking transfers."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import TransferViewSet

router = DefaultRouter()
router.register(r"", TransferViewSet, basename="transfer")

urlpatterns = [
    path("approve/<str:pk>/", TransferViewSet.as_view({"put": "approve"}), name="transfer-approve"),
    path("", include(router.urls)),
]
