"""Object builders shared by the booking tests."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from itertools import count

from django.utils import timezone

from apps.bookings.models import Booking
from apps.hotels.models import Hotel, Room
from apps.users.models import User

_sequence = count(1)


def make_user(role: str = User.RoleChoices.USER, **extra) -> User:
    n = next(_sequence)
    return User.objects.create_user(
        email=extra.pop("email", f"user{n}@example.com"),
        password="StrongPass123",
        role=role,
        **extra,
    )


def make_hotel(**extra) -> Hotel:
    defaults = {
        "name": "Grand Hotel",
        "description": "Отель в центре города",
        "street": "Abay ave 10",
        "city": "Almaty",
        "state": "Almaty",
        "country": "Kazakhstan",
        "zip_code": "050000",
        "phone": "+77000000001",
        "email": "hotel@example.com",
    }
    defaults.update(extra)
    return Hotel.objects.create(**defaults)


def make_room(hotel: Hotel, price: Decimal = Decimal("100.00"), **extra) -> Room:
    defaults = {
        "room_number": str(100 + next(_sequence)),
        "room_type": Room.RoomType.DOUBLE,
        "bed_type": Room.BedType.DOUBLE,
        "capacity": 2,
    }
    defaults.update(extra)
    return Room.objects.create(hotel=hotel, price=price, **defaults)


def make_booking(user: User, room: Room, check_in: date, nights: int = 2, status: str = Booking.Status.PENDING) -> Booking:
    return Booking.objects.create(
        user=user,
        hotel=room.hotel,
        room=room,
        check_in=check_in,
        check_out=check_in + timedelta(days=nights),
        adults=1,
        total_nights=nights,
        total_price=room.price * nights,
        status=status,
    )


def future(days: int) -> date:
    return timezone.localdate() + timedelta(days=days)
