"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.users.models import User

from .helpers import future, make_booking, make_hotel, make_room, make_user


class BookingAPITests(APITestCase):
    """Covers создание, конфликты, смену статуса и удаление бронирований."""

    def setUp(self) -> None:
        self.guest = make_user(email="guest@example.com")
        self.other = make_user(email="other@example.com")
        self.admin = make_user(role=User.RoleChoices.ADMIN, email="admin@example.com")
        self.hotel = make_hotel()
        self.room = make_room(self.hotel, price=Decimal("100.00"))
        self.client.force_authenticate(self.guest)
        self.list_url = reverse("booking-list")

    def _payload(self, check_in: date, check_out: date, **extra) -> dict:
        payload = {
            "hotel": self.hotel.pk,
            "room": self.room.pk,
            "check_in": str(check_in),
            "check_out": str(check_out),
            "guests": {"adults": 2, "children": 1},
        }
        payload.update(extra)
        return payload

    def _status_url(self, booking_id) -> str:
        return reverse("booking-update-status", args=[booking_id])

    def test_anonymous_user_is_rejected(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_guest_can_create_booking(self) -> None:
        check_in = future(1)
        response = self.client.post(
            self.list_url,
            self._payload(check_in, check_in + timedelta(days=3), special_requests="Тихий номер"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(response.data["total_price"], "300.00")
        self.assertEqual(response.data["total_nights"], 3)
        self.assertEqual(response.data["guests"], {"adults": 2, "children": 1})
        self.assertEqual(response.data["user_id"], self.guest.pk)
        self.assertEqual(response.data["room_id"], self.room.pk)
        self.assertIsNone(response.data["cancellation_reason"])
        self.assertEqual(Booking.objects.get().special_requests, "Тихий номер")

    def test_prevent_double_booking_on_overlap(self) -> None:
        check_in = future(1)
        first = self.client.post(self.list_url, self._payload(check_in, check_in + timedelta(days=2)), format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        self.client.force_authenticate(self.other)
        conflict = self.client.post(
            self.list_url,
            self._payload(check_in + timedelta(days=1), check_in + timedelta(days=3)),
            format="json",
        )
        self.assertEqual(conflict.status_code, status.HTTP_409_CONFLICT, conflict.data)
        self.assertEqual(conflict.data["code"], "conflict")
        self.assertEqual(conflict.data["detail"], "Room is not available for the selected dates")
        self.assertEqual(Booking.objects.count(), 1)

    def test_back_to_back_bookings_are_allowed(self) -> None:
        check_in = future(1)
        first = self.client.post(self.list_url, self._payload(check_in, check_in + timedelta(days=2)), format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        second = self.client.post(
            self.list_url,
            self._payload(check_in + timedelta(days=2), check_in + timedelta(days=4)),
            format="json",
        )
        self.assertEqual(second.status_code, status.HTTP_201_CREATED, second.data)
        self.assertEqual(Booking.objects.count(), 2)

    def test_invalid_input_is_rejected(self) -> None:
        check_in = future(5)
        cases = {
            "inverted dates": self._payload(check_in, check_in - timedelta(days=1)),
            "no adults": self._payload(check_in, check_in + timedelta(days=1), guests={"adults": 0}),
            "unknown room": self._payload(check_in, check_in + timedelta(days=1), room=999999),
            "room of another hotel": self._payload(
                check_in, check_in + timedelta(days=1), hotel=make_hotel(name="Other").pk
            ),
        }
        for name, payload in cases.items():
            with self.subTest(name):
                response = self.client.post(self.list_url, payload, format="json")
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
                self.assertEqual(response.data["code"], "validation_error")
        self.assertFalse(Booking.objects.exists())

    def test_list_shows_own_bookings_for_users_and_all_for_admin(self) -> None:
        mine = make_booking(self.guest, self.room, future(1))
        make_booking(self.other, self.room, future(10))

        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["id"] for item in response.data], [mine.pk])

        self.client.force_authenticate(self.admin)
        response = self.client.get(self.list_url)
        self.assertEqual(len(response.data), 2)
        # Сортировка по дате заезда, сначала поздние.
        self.assertGreater(response.data[0]["check_in"], response.data[1]["check_in"])

    def test_list_filters(self) -> None:
        early = make_booking(self.guest, self.room, future(1))
        late = make_booking(self.guest, self.room, future(20), status=Booking.Status.CANCELLED)

        response = self.client.get(self.list_url, {"status": "cancelled"})
        self.assertEqual([item["id"] for item in response.data], [late.pk])

        response = self.client.get(self.list_url, {"start_date": str(future(10))})
        self.assertEqual([item["id"] for item in response.data], [late.pk])

        response = self.client.get(self.list_url, {"end_date": str(future(10))})
        self.assertEqual([item["id"] for item in response.data], [early.pk])

    def test_retrieve_permissions(self) -> None:
        booking = make_booking(self.other, self.room, future(1))
        url = reverse("booking-detail", args=[booking.pk])

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["code"], "forbidden")

        self.client.force_authenticate(self.other)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)

        self.client.force_authenticate(self.admin)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)

        missing = self.client.get(reverse("booking-detail", args=[999999]))
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(missing.data["code"], "not_found")

    def test_guest_can_cancel_booking(self) -> None:
        booking = make_booking(self.guest, self.room, future(3))

        without_reason = self.client.patch(self._status_url(booking.pk), {"status": "cancelled"}, format="json")
        self.assertEqual(without_reason.status_code, status.HTTP_400_BAD_REQUEST, without_reason.data)

        response = self.client.patch(
            self._status_url(booking.pk),
            {"status": "cancelled", "cancellation_reason": "Изменились планы"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "cancelled")
        self.assertEqual(response.data["cancellation_reason"], "Изменились планы")

    def test_guest_cannot_confirm_and_admin_can(self) -> None:
        booking = make_booking(self.guest, self.room, future(3))

        response = self.client.patch(self._status_url(booking.pk), {"status": "confirmed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)

        self.client.force_authenticate(self.admin)
        response = self.client.patch(self._status_url(booking.pk), {"status": "confirmed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "confirmed")

    def test_terminal_booking_cannot_change(self) -> None:
        booking = make_booking(self.guest, self.room, future(3), status=Booking.Status.COMPLETED)
        self.client.force_authenticate(self.admin)

        response = self.client.patch(self._status_url(booking.pk), {"status": "pending"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_unknown_status_value(self) -> None:
        booking = make_booking(self.guest, self.room, future(3))
        response = self.client.patch(self._status_url(booking.pk), {"status": "expired"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_other_user_cannot_change_status(self) -> None:
        booking = make_booking(self.other, self.room, future(3))
        response = self.client.patch(
            self._status_url(booking.pk),
            {"status": "cancelled", "cancellation_reason": "Не моя бронь"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)

    def test_delete_is_admin_only(self) -> None:
        booking = make_booking(self.guest, self.room, future(3))
        url = reverse("booking-detail", args=[booking.pk])

        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Booking.objects.filter(pk=booking.pk).exists())
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_404_NOT_FOUND)
