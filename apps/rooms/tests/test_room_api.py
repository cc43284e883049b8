"""Integration tests for room API endpoints."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.customers.models import Customer
from apps.rooms.models import Room


class RoomAPITests(APITestCase):
    def setUp(self) -> None:
        self.room_a = Room.objects.create(description="A")
        self.room_b = Room.objects.create(description="B")
        self.list_url = reverse("room-list")

    def test_list_rooms_in_id_order(self) -> None:
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data,
            [
                {"id": self.room_a.id, "description": "A"},
                {"id": self.room_b.id, "description": "B"},
            ],
        )

    def test_retrieve_room(self) -> None:
        response = self.client.get(reverse("room-detail", args=[self.room_b.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["description"], "B")

    def test_retrieve_unknown_room_returns_404(self) -> None:
        response = self.client.get(reverse("room-detail", args=[9999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_create_room(self) -> None:
        response = self.client.post(self.list_url, {"description": "Suite"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(Room.objects.filter(pk=response.data["id"], description="Suite").exists())

    def test_create_room_without_description_returns_bad_request(self) -> None:
        response = self.client.post(self.list_url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_room_removes_its_bookings(self) -> None:
        customer = Customer.objects.create(name="Alice")
        start = timezone.localdate() + timedelta(days=2)
        Booking.objects.create(customer=customer, room=self.room_a, start_date=start, end_date=start)

        response = self.client.delete(reverse("room-detail", args=[self.room_a.id]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Room.objects.filter(pk=self.room_a.id).exists())
        self.assertFalse(Booking.objects.exists())

    def test_delete_with_non_positive_id_returns_bad_request(self) -> None:
        for room_id in (0, -1):
            with self.subTest(room_id=room_id):
                response = self.client.delete(reverse("room-detail", args=[room_id]))
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        self.assertEqual(Room.objects.count(), 2)

    def test_delete_unknown_room_returns_404(self) -> None:
        response = self.client.delete(reverse("room-detail", args=[9999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
