"""DRF exception handler that maps booking errors to HTTP responses."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from .domain.exceptions import (
    BookingConflictError,
    BookingError,
    BookingForbiddenError,
    BookingNotFoundError,
    BookingValidationError,
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    BookingValidationError: status.HTTP_400_BAD_REQUEST,
    BookingForbiddenError: status.HTTP_403_FORBIDDEN,
    BookingNotFoundError: status.HTTP_404_NOT_FOUND,
    BookingConflictError: status.HTTP_409_CONFLICT,
}


def booking_exception_handler(exc, context):
    """Ответ ``{"detail", "code"}`` для ошибок бронирования, остальное отдаём DRF."""
    if isinstance(exc, BookingError):
        http_status = STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
        view = context.get("view")
        view_name = view.__class__.__name__ if view is not None else "-"
        logger.info(f"{exc.__class__.__name__} in {view_name}: {exc.message}")
        return Response({"detail": exc.message, "code": exc.code}, status=http_status)
    return exception_handler(exc, context)
