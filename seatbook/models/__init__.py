"""SQLAlchemy models."""

from seatbook.models.booking import ACTIVE_BOOKING_STATUSES, Booking, BookingStatus
from seatbook.models.session import Session

__all__ = [
    "Session",
    "Booking",
    "BookingStatus",
    "ACTIVE_BOOKING_STATUSES",
]
