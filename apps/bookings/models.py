"""Booking models for the hotel platform."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain.state_machine import ACTIVE_STATUSES, BookingStatus
from .domain.value_objects import Guests

OVERLAP_CONSTRAINT_NAME = "booking_no_room_overlap"


class BookingQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status__in=[status.value for status in ACTIVE_STATUSES])

    def for_room(self, room_id):
        return self.filter(room_id=room_id)


class Booking(models.Model):
    """Бронирование номера отеля.

    Инвариант: у одного номера нет двух активных (pending/confirmed)
    бронирований с пересекающимися датами. Проверка выполняется в
    ``CreateBookingHandler`` под блокировкой номера, а на PostgreSQL
    дополнительно ограничением EXCLUDE (миграция 0002).
    """

    class Status(models.TextChoices):
        PENDING = BookingStatus.PENDING.value, _("Ожидает подтверждения")
        CONFIRMED = BookingStatus.CONFIRMED.value, _("Подтверждено")
        CANCELLED = BookingStatus.CANCELLED.value, _("Отменено")
        COMPLETED = BookingStatus.COMPLETED.value, _("Завершено")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    hotel = models.ForeignKey(
        "hotels.Hotel",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    room = models.ForeignKey(
        "hotels.Room",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    check_in = models.DateField()
    check_out = models.DateField()
    adults = models.PositiveSmallIntegerField(default=1)
    children = models.PositiveSmallIntegerField(default=0)
    total_nights = models.PositiveSmallIntegerField(default=1)
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="USD")
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    cancellation_reason = models.CharField(max_length=500, null=True, blank=True)
    special_requests = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        verbose_name = _("Бронирование")
        verbose_name_plural = _("Бронирования")
        ordering = ["-check_in", "-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out__gt=models.F("check_in")),
                name="booking_valid_dates",
            ),
            models.CheckConstraint(
                condition=models.Q(adults__gte=1),
                name="booking_at_least_one_adult",
            ),
            models.CheckConstraint(
                condition=models.Q(total_price__gte=0),
                name="booking_total_price_non_negative",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "status", "check_in", "check_out"], name="booking_room_status_dates_idx"),
            models.Index(fields=["user", "-check_in"], name="booking_user_check_in_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} room {self.room_id} {self.check_in}..{self.check_out} ({self.status})"

    @property
    def guests(self) -> Guests:
        return Guests(adults=self.adults, children=self.children)

    @property
    def is_active(self) -> bool:
        return self.status in {status.value for status in ACTIVE_STATUSES}
