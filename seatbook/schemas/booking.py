"""Booking schemas."""

from datetime import date, datetime, time
from enum import Enum
from typing import Any

from seatbook.schemas.common import BaseSchema


class BookingStatus(str, Enum):
    """Booking status enum."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class BookingCreate(BaseSchema):
    """
    Schema for booking a seat.

    Both fields are optional and untyped here so that a missing or malformed
    value is reported as a bad request by the allocation service rather than
    being coerced or rejected by the schema.
    """

    session_id: Any = None
    seat_number: Any = None


class BookingResponse(BaseSchema):
    """Schema for booking response."""

    id: int
    session_id: int
    seat_number: int
    status: BookingStatus
    user_id: str | None = None
    booking_reference: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AllocationResponse(BaseSchema):
    """Schema for a successful seat allocation."""

    status: BookingStatus = BookingStatus.CONFIRMED
    booking: BookingResponse


class BookingSessionSummary(BaseSchema):
    """Short session description attached to a user's booking."""

    id: int
    title: str
    session_date: date
    start_time: time


class UserBookingResponse(BookingResponse):
    """Booking response with the booked session."""

    session: BookingSessionSummary | None = None
