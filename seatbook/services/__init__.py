"""Services package."""

from seatbook.services.allocation_service import AllocationService
from seatbook.services.booking_service import BookingService
from seatbook.services.session_service import SessionService

__all__ = [
    "AllocationService",
    "SessionService",
    "BookingService",
]
