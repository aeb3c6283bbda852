"""API tests for the hotel catalogue."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.hotels.models import Hotel
from apps.users.models import User


class HotelAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="guest@example.com", password="GuestPass123")
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
        self.payload = {
            "name": "Beach House",
            "address": "99 Beach Rd",
            "district": "Pattaya",
            "province": "Chonburi",
            "postal_code": "20150",
            "tel": "038-111-2222",
        }

    def test_anyone_can_list_hotels(self) -> None:
        response = self.client.get(reverse("hotel-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["data"][0]["name"], "Riverside Inn")

    def test_filter_by_province(self) -> None:
        Hotel.objects.create(**self.payload)

        response = self.client.get(reverse("hotel-list"), {"province": "Chonburi"})

        self.assertEqual([item["name"] for item in response.data["data"]], ["Beach House"])

    def test_get_missing_hotel(self) -> None:
        response = self.client.get(reverse("hotel-detail", args=[999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(response.data["success"])

    def test_anonymous_cannot_create(self) -> None:
        response = self.client.post(reverse("hotel-list"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_regular_user_cannot_create(self) -> None:
        self.client.force_authenticate(self.user)

        response = self.client.post(reverse("hotel-list"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Hotel.objects.filter(name="Beach House").exists())

    def test_admin_can_create(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(reverse("hotel-list"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["data"]["postal_code"], "20150")

    def test_create_validates_postal_code_and_name(self) -> None:
        self.client.force_authenticate(self.admin)
        payload = dict(self.payload, name="Riverside Inn", postal_code="1234")

        response = self.client.post(reverse("hotel-list"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("name:", response.data["message"])
        self.assertIn("postal_code:", response.data["message"])

    def test_admin_can_update(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.patch(
            reverse("hotel-detail", args=[self.hotel.id]),
            {"tel": "021-999-8888"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.hotel.refresh_from_db()
        self.assertEqual(self.hotel.tel, "021-999-8888")

    def test_delete_removes_bookings(self) -> None:
        Booking.objects.create(
            owner=self.user,
            hotel=self.hotel,
            booking_date=timezone.localdate() + timedelta(days=3),
            number_of_nights=2,
        )
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("hotel-detail", args=[self.hotel.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["data"], {})
        self.assertFalse(Hotel.objects.filter(pk=self.hotel.id).exists())
        self.assertFalse(Booking.objects.exists())

    def test_regular_user_cannot_delete(self) -> None:
        self.client.force_authenticate(self.user)

        response = self.client.delete(reverse("hotel-detail", args=[self.hotel.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Hotel.objects.filter(pk=self.hotel.id).exists())
