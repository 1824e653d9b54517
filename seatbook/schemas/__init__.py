"""Pydantic schemas for API request/response."""

from seatbook.schemas.booking import (
    AllocationResponse,
    BookingCreate,
    BookingResponse,
    BookingStatus,
    UserBookingResponse,
)
from seatbook.schemas.session import (
    SessionCreate,
    SessionDetailResponse,
    SessionResponse,
)

__all__ = [
    "SessionCreate",
    "SessionResponse",
    "SessionDetailResponse",
    "AllocationResponse",
    "BookingCreate",
    "BookingResponse",
    "BookingStatus",
    "UserBookingResponse",
]
