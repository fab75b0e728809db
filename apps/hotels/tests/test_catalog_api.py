"""API tests for the hotel catalog."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.bookings.tests.helpers import future, make_booking, make_hotel, make_room, make_user
from apps.hotels.models import Hotel, Room
from apps.users.models import User


class HotelAPITests(APITestCase):
    def setUp(self) -> None:
        self.active = make_hotel(name="Open")
        self.hidden = make_hotel(name="Closed", is_active=False)
        self.admin = make_user(role=User.RoleChoices.ADMIN)

    def test_public_list_hides_inactive_hotels(self) -> None:
        response = self.client.get(reverse("hotel-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["name"] for item in response.data], ["Open"])

        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("hotel-list"))
        self.assertEqual(len(response.data), 2)

    def test_only_admin_can_create(self) -> None:
        payload = {
            "name": "New",
            "description": "Новый отель",
            "street": "Main 1",
            "city": "Astana",
            "state": "Astana",
            "country": "Kazakhstan",
            "zip_code": "010000",
            "phone": "+77000000009",
            "email": "new@example.com",
        }
        self.client.force_authenticate(make_user())
        self.assertEqual(self.client.post(reverse("hotel-list"), payload, format="json").status_code, 403)

        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse("hotel-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(Hotel.objects.filter(name="New").exists())


class HotelFilterAndDetailTests(APITestCase):
    def setUp(self) -> None:
        self.almaty = make_hotel(name="Almaty Plaza", city="Almaty", country="Kazakhstan",
                                 rating=Decimal("4.5"), amenities=["wifi", "pool", "spa"])
        self.astana = make_hotel(name="Astana Inn", city="Astana", country="Kazakhstan",
                                 rating=Decimal("3.0"), amenities=["wifi"])
        self.tashkent = make_hotel(name="Tashkent Palace", city="Tashkent", country="Uzbekistan",
                                   rating=Decimal("4.8"), amenities=["pool", "wifi-premium"])

    def _names(self, params) -> list:
        response = self.client.get(reverse("hotel-list"), params)
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        return sorted(item["name"] for item in response.data)

    def test_city_and_country_are_case_insensitive(self) -> None:
        self.assertEqual(self._names({"city": "almaty"}), ["Almaty Plaza"])
        self.assertEqual(self._names({"country": "KAZAKH"}), ["Almaty Plaza", "Astana Inn"])

    def test_min_rating(self) -> None:
        self.assertEqual(self._names({"min_rating": "4.5"}), ["Almaty Plaza", "Tashkent Palace"])

    def test_amenities_require_all_listed(self) -> None:
        self.assertEqual(self._names({"amenities": "wifi"}), ["Almaty Plaza", "Astana Inn"])
        self.assertEqual(self._names({"amenities": "wifi, pool"}), ["Almaty Plaza"])
        self.assertEqual(self._names({"amenities": "pool,gym"}), [])

    def test_retrieve_includes_rooms(self) -> None:
        suite = make_room(self.almaty, price=Decimal("250.00"), room_type=Room.RoomType.SUITE)
        single = make_room(self.almaty, price=Decimal("60.00"), room_type=Room.RoomType.SINGLE)
        make_room(self.astana)

        response = self.client.get(reverse("hotel-detail", args=[self.almaty.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([room["id"] for room in response.data["rooms"]], [single.pk, suite.pk])

        # В списке отелей номера не разворачиваются.
        response = self.client.get(reverse("hotel-list"))
        self.assertNotIn("rooms", response.data[0])


class RoomAPITests(APITestCase):
    def setUp(self) -> None:
        self.hotel = make_hotel()
        self.other_hotel = make_hotel(name="Second")
        self.cheap = make_room(self.hotel, price=Decimal("50.00"), room_type=Room.RoomType.SINGLE,
                               bed_type=Room.BedType.SINGLE, capacity=1)
        self.suite = make_room(self.hotel, price=Decimal("300.00"), room_type=Room.RoomType.SUITE,
                               bed_type=Room.BedType.KING, capacity=4)
        self.elsewhere = make_room(self.other_hotel, price=Decimal("120.00"))
        self.admin = make_user(role=User.RoleChoices.ADMIN)
        self.list_url = reverse("room-list")

    def _ids(self, params=None) -> list:
        response = self.client.get(self.list_url, params or {})
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        return [item["id"] for item in response.data]

    def test_rooms_are_ordered_by_price(self) -> None:
        self.assertEqual(self._ids(), [self.cheap.pk, self.elsewhere.pk, self.suite.pk])

    def test_filters(self) -> None:
        self.assertEqual(self._ids({"hotel": self.other_hotel.pk}), [self.elsewhere.pk])
        self.assertEqual(self._ids({"type": "suite"}), [self.suite.pk])
        self.assertEqual(self._ids({"min_price": "100", "max_price": "200"}), [self.elsewhere.pk])
        self.assertEqual(self._ids({"capacity": 3}), [self.suite.pk])
        self.assertEqual(self._ids({"bed_type": "single"}), [self.cheap.pk])

        Room.objects.filter(pk=self.suite.pk).update(is_available=False)
        self.assertEqual(self._ids({"is_available": "false"}), [self.suite.pk])

    def test_room_number_is_unique_per_hotel(self) -> None:
        self.client.force_authenticate(self.admin)
        payload = {
            "hotel": self.hotel.pk,
            "room_number": self.cheap.room_number,
            "room_type": "double",
            "bed_type": "double",
            "description": "Дубликат",
            "price": "80.00",
        }
        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("room_number", response.data)

        payload["hotel"] = self.other_hotel.pk
        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_availability_hint_is_read_only(self) -> None:
        self.client.force_authenticate(self.admin)
        url = reverse("room-detail", args=[self.cheap.pk])
        response = self.client.patch(url, {"is_available": False}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.cheap.refresh_from_db()
        self.assertTrue(self.cheap.is_available)

    def test_room_cannot_move_to_another_hotel(self) -> None:
        booking = make_booking(make_user(), self.cheap, future(5))
        self.client.force_authenticate(self.admin)
        url = reverse("room-detail", args=[self.cheap.pk])

        response = self.client.patch(url, {"hotel": self.other_hotel.pk}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("hotel", response.data)
        self.cheap.refresh_from_db()
        booking.refresh_from_db()
        self.assertEqual(self.cheap.hotel_id, self.hotel.pk)
        self.assertEqual(booking.hotel_id, booking.room.hotel_id)

        # Тот же отель в теле запроса не считается переносом.
        response = self.client.patch(url, {"hotel": self.hotel.pk, "price": "55.00"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_regular_user_cannot_modify_rooms(self) -> None:
        self.client.force_authenticate(make_user())
        url = reverse("room-detail", args=[self.cheap.pk])
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)


class RoomAvailabilityEndpointTests(APITestCase):
    def setUp(self) -> None:
        self.room = make_room(make_hotel())
        self.check_in = future(10)
        make_booking(make_user(), self.room, self.check_in, nights=3)
        self.url = reverse("room-availability", args=[self.room.pk])

    def _check(self, check_in, check_out):
        return self.client.get(self.url, {"check_in": str(check_in), "check_out": str(check_out)})

    def test_overlapping_dates_are_unavailable(self) -> None:
        response = self._check(self.check_in + timedelta(days=1), self.check_in + timedelta(days=5))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"room": self.room.pk, "available": False})

    def test_back_to_back_dates_are_available(self) -> None:
        response = self._check(self.check_in + timedelta(days=3), self.check_in + timedelta(days=5))
        self.assertEqual(response.data["available"], True)

    def test_cancelled_booking_does_not_block(self) -> None:
        Booking.objects.update(status=Booking.Status.CANCELLED)
        response = self._check(self.check_in, self.check_in + timedelta(days=3))
        self.assertEqual(response.data["available"], True)

    def test_inverted_dates_are_rejected(self) -> None:
        response = self._check(self.check_in, self.check_in - timedelta(days=1))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
