"""URL routing for the hotel domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from apps.bookings.views import BookingViewSet

from .views import HotelViewSet

router = DefaultRouter()
router.register(r"", HotelViewSet, basename="hotel")

urlpatterns = [
    # Re-route into the bookings resource
    path(
        "<int:hotel_id>/bookings/",
        BookingViewSet.as_view({"get": "list", "post": "create"}),
        name="hotel-bookings",
    ),
    path("", include(router.urls)),
]
