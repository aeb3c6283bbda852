"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import patch

from django.db import DatabaseError
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.bookings.tasks import lookup_booking_owner
from apps.hotels.models import Hotel
from apps.users.models import User


class BookingAPITests(APITestCase):
    """Covers creation rules, visibility and ownership checks."""

    def setUp(self) -> None:
        self.user = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.other = User.objects.create_user(email="other@example.com", password="OtherPass123")
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.hotel = Hotel.objects.create(
            name="Riverside Inn",
            address="12 Charoen Krung Rd",
            district="Bang Rak",
            province="Bangkok",
            postal_code="10500",
            tel="021-234-5678",
        )
        self.second_hotel = Hotel.objects.create(
            name="Hilltop Lodge",
            address="7 Nimman Rd",
            district="Mueang",
            province="Chiang Mai",
            postal_code="50200",
            tel="053-222-3333",
        )
        self.today = timezone.localdate()
        self.client.force_authenticate(self.user)
        self.list_url = reverse("booking-list")

    def _create_url(self, hotel_id: int) -> str:
        return reverse("hotel-bookings", args=[hotel_id])

    def _payload(self, days_ahead: int = 1, nights: int = 2) -> dict[str, object]:
        return {
            "booking_date": str(self.today + timedelta(days=days_ahead)),
            "number_of_nights": nights,
        }

    def _booking(self, owner: User, hotel: Hotel | None = None) -> Booking:
        return Booking.objects.create(
            owner=owner,
            hotel=hotel or self.hotel,
            booking_date=self.today + timedelta(days=5),
            number_of_nights=1,
        )

    # --- create ---------------------------------------------------------------

    def test_user_can_create_booking(self) -> None:
        response = self.client.post(self._create_url(self.hotel.id), self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["data"]["owner"], self.user.id)
        self.assertEqual(response.data["data"]["hotel"]["name"], "Riverside Inn")
        booking = Booking.objects.get()
        self.assertEqual(booking.owner, self.user)
        self.assertEqual(booking.hotel, self.hotel)

    def test_create_ignores_owner_and_hotel_from_body(self) -> None:
        payload = self._payload()
        payload.update({"owner": self.other.id, "hotel": self.second_hotel.id})

        response = self.client.post(self._create_url(self.hotel.id), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        booking = Booking.objects.get()
        self.assertEqual(booking.owner, self.user)
        self.assertEqual(booking.hotel, self.hotel)

    def test_create_with_hotel_in_body(self) -> None:
        payload = self._payload()
        payload["hotel"] = self.second_hotel.id

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Booking.objects.get().hotel, self.second_hotel)

    def test_create_without_hotel_is_rejected(self) -> None:
        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("hotel", response.data["message"])

    def test_create_rejects_past_date(self) -> None:
        response = self.client.post(self._create_url(self.hotel.id), self._payload(days_ahead=-1), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertFalse(response.data["success"])
        self.assertIn("booking date should be after today", response.data["message"])
        self.assertFalse(Booking.objects.exists())

    def test_create_rejects_today(self) -> None:
        response = self.client.post(self._create_url(self.hotel.id), self._payload(days_ahead=0), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertFalse(Booking.objects.exists())

    def test_create_rejects_nights_out_of_range(self) -> None:
        for nights in (0, 4):
            with self.subTest(nights=nights):
                response = self.client.post(
                    self._create_url(self.hotel.id),
                    self._payload(nights=nights),
                    format="json",
                )
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
                self.assertIn("Number of nights", response.data["message"])
        self.assertFalse(Booking.objects.exists())

    def test_create_accepts_nights_boundaries(self) -> None:
        for nights in (1, 3):
            response = self.client.post(
                self._create_url(self.hotel.id),
                self._payload(nights=nights),
                format="json",
            )
            self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Booking.objects.count(), 2)

    def test_create_rejects_non_object_body(self) -> None:
        for url, body in ((self._create_url(self.hotel.id), []), (self.list_url, [1])):
            with self.subTest(url=url):
                response = self.client.post(url, body, format="json")
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
                self.assertFalse(response.data["success"])
        self.assertFalse(Booking.objects.exists())

    def test_create_for_unknown_hotel(self) -> None:
        response = self.client.post(self._create_url(999), self._payload(days_ahead=-1), format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["message"], "No hotel with the id of 999")

    def test_create_dispatches_owner_lookup_after_commit(self) -> None:
        with patch("apps.bookings.tasks.lookup_booking_owner.apply_async") as apply_async:
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.post(self._create_url(self.hotel.id), self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        apply_async.assert_called_once_with(args=[response.data["data"]["id"]], retry=False)

    def test_owner_lookup_failure_is_not_surfaced(self) -> None:
        with patch("apps.bookings.tasks.lookup_booking_owner.apply_async", side_effect=RuntimeError("broker down")):
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.post(self._create_url(self.hotel.id), self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Booking.objects.count(), 1)

    # --- list / get -----------------------------------------------------------

    def test_user_lists_only_own_bookings(self) -> None:
        own = self._booking(self.user)
        self._booking(self.other)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual([item["id"] for item in response.data["data"]], [own.id])

    def test_admin_lists_all_bookings(self) -> None:
        self._booking(self.user)
        self._booking(self.other)
        self.client.force_authenticate(self.admin)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["count"], 2)

    def test_list_filtered_by_hotel(self) -> None:
        in_hotel = self._booking(self.user, self.hotel)
        self._booking(self.user, self.second_hotel)
        self._booking(self.other, self.hotel)

        nested = self.client.get(self._create_url(self.hotel.id))
        query = self.client.get(self.list_url, {"hotel": self.hotel.id})

        for response in (nested, query):
            self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
            self.assertEqual([item["id"] for item in response.data["data"]], [in_hotel.id])

        self.client.force_authenticate(self.admin)
        admin_nested = self.client.get(self._create_url(self.hotel.id))
        self.assertEqual(admin_nested.data["count"], 2)

    def test_get_own_booking(self) -> None:
        booking = self._booking(self.user)

        response = self.client.get(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["data"]["id"], booking.id)
        self.assertEqual(response.data["data"]["hotel"]["tel"], "021-234-5678")

    def test_get_foreign_booking_is_forbidden(self) -> None:
        booking = self._booking(self.other)

        response = self.client.get(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)
        self.assertFalse(response.data["success"])
        self.assertNotIn("data", response.data)

    def test_admin_can_get_any_booking(self) -> None:
        booking = self._booking(self.other)
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_get_missing_booking(self) -> None:
        response = self.client.get(reverse("booking-detail", args=[999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["message"], "No booking with the id of 999")

    def test_authentication_required(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])

    # --- update ---------------------------------------------------------------

    def test_owner_can_update_booking(self) -> None:
        booking = self._booking(self.user)
        new_date = self.today + timedelta(days=10)

        response = self.client.put(
            reverse("booking-detail", args=[booking.id]),
            {"booking_date": str(new_date), "number_of_nights": 3},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.booking_date, new_date)
        self.assertEqual(booking.number_of_nights, 3)

    def test_update_with_only_some_fields(self) -> None:
        booking = self._booking(self.user)

        response = self.client.put(
            reverse("booking-detail", args=[booking.id]),
            {"number_of_nights": 2},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.number_of_nights, 2)
        self.assertEqual(booking.booking_date, self.today + timedelta(days=5))

    def test_update_rejects_past_date(self) -> None:
        booking = self._booking(self.user)

        response = self.client.patch(
            reverse("booking-detail", args=[booking.id]),
            {"booking_date": str(self.today)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("Cannot change booking date to be before today", response.data["message"])
        booking.refresh_from_db()
        self.assertEqual(booking.booking_date, self.today + timedelta(days=5))

    def test_update_rejects_nights_out_of_range(self) -> None:
        booking = self._booking(self.user)

        response = self.client.put(
            reverse("booking-detail", args=[booking.id]),
            {"number_of_nights": 4},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.number_of_nights, 1)

    def test_update_cannot_move_booking_to_another_hotel(self) -> None:
        booking = self._booking(self.user)

        response = self.client.patch(
            reverse("booking-detail", args=[booking.id]),
            {"hotel": self.second_hotel.id, "owner": self.other.id},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.hotel, self.hotel)
        self.assertEqual(booking.owner, self.user)

    def test_update_foreign_booking_is_forbidden(self) -> None:
        booking = self._booking(self.other)

        response = self.client.put(
            reverse("booking-detail", args=[booking.id]),
            {"number_of_nights": 2},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.number_of_nights, 1)

    # --- delete ---------------------------------------------------------------

    def test_owner_can_delete_booking(self) -> None:
        booking = self._booking(self.user)

        response = self.client.delete(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data, {"success": True, "data": {}})
        self.assertFalse(Booking.objects.filter(pk=booking.id).exists())

    def test_delete_foreign_booking_is_forbidden(self) -> None:
        booking = self._booking(self.other)

        response = self.client.delete(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)
        self.assertTrue(Booking.objects.filter(pk=booking.id).exists())

    def test_admin_can_delete_any_booking(self) -> None:
        booking = self._booking(self.other)
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertFalse(Booking.objects.filter(pk=booking.id).exists())

    # --- failures -------------------------------------------------------------

    def test_store_failure_becomes_internal_error(self) -> None:
        with patch("apps.bookings.services.visible_bookings", side_effect=DatabaseError("connection lost")):
            response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(
            response.data,
            {"success": False, "message": "Cannot process booking request"},
        )


class LookupBookingOwnerTaskTests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        hotel = Hotel.objects.create(
            name="Riverside Inn",
            address="12 Charoen Krung Rd",
            district="Bang Rak",
            province="Bangkok",
            postal_code="10500",
            tel="021-234-5678",
        )
        self.booking = Booking.objects.create(
            owner=self.user,
            hotel=hotel,
            booking_date=timezone.localdate() + timedelta(days=2),
            number_of_nights=1,
        )

    def test_logs_owner(self) -> None:
        with self.assertLogs("apps.bookings.tasks", level="INFO") as logs:
            lookup_booking_owner(self.booking.id)

        self.assertIn("guest@example.com", logs.output[0])

    def test_missing_booking_is_only_logged(self) -> None:
        with self.assertLogs("apps.bookings.tasks", level="WARNING"):
            lookup_booking_owner(999)
