"""Hotel catalog models.

Содержит отели и номера. Номер принадлежит ровно одному отелю, номер
комнаты уникален в пределах отеля. Флаг ``is_available`` у номера не
является источником истины: доступность на даты определяется только
пересечением активных бронирований.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Hotel(models.Model):
    """Отель."""

    name = models.CharField(max_length=255)
    description = models.TextField()
    street = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    country = models.CharField(max_length=100)
    zip_code = models.CharField(max_length=20)
    phone = models.CharField(max_length=30)
    email = models.EmailField()
    amenities = models.JSONField(default=list, blank=True)
    rating = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        default=Decimal("0.0"),
        validators=[MinValueValidator(Decimal("0.0")), MaxValueValidator(Decimal("5.0"))],
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Отель")
        verbose_name_plural = _("Отели")
        ordering = ["-rating", "name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.city})"


class Room(models.Model):
    """Номер отеля."""

    class RoomType(models.TextChoices):
        SINGLE = "single", _("Single")
        DOUBLE = "double", _("Double")
        TWIN = "twin", _("Twin")
        QUEEN = "queen", _("Queen")
        KING = "king", _("King")
        SUITE = "suite", _("Suite")

    class BedType(models.TextChoices):
        SINGLE = "single", _("Single")
        DOUBLE = "double", _("Double")
        QUEEN = "queen", _("Queen")
        KING = "king", _("King")

    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name="rooms")
    room_number = models.CharField(max_length=20)
    room_type = models.CharField(max_length=20, choices=RoomType.choices)
    description = models.TextField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Цена за ночь."),
    )
    capacity = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    floor = models.PositiveSmallIntegerField(default=0)
    size = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    bed_type = models.CharField(max_length=20, choices=BedType.choices)
    amenities = models.JSONField(default=list, blank=True)
    is_available = models.BooleanField(
        default=True,
        help_text=_("Кэш: свободен ли номер сегодня. Пересчитывается по активным бронированиям."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Номер")
        verbose_name_plural = _("Номера")
        ordering = ["price", "room_number"]
        constraints = [
            models.UniqueConstraint(fields=["hotel", "room_number"], name="room_number_unique_per_hotel"),
            models.CheckConstraint(condition=models.Q(price__gte=0), name="room_price_non_negative"),
        ]

    def __str__(self) -> str:
        return f"{self.hotel.name} #{self.room_number}"
