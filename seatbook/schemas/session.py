"""Session schemas."""

from datetime import date, datetime, time

from pydantic import Field

from seatbook.schemas.common import BaseSchema


class SessionCreate(BaseSchema):
    """Schema for creating a session."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    session_date: date
    start_time: time
    duration_minutes: int | None = Field(None, gt=0)
    capacity: int = Field(..., ge=1)


class SessionResponse(BaseSchema):
    """Schema for session response."""

    id: int
    title: str
    description: str | None
    session_date: date
    start_time: time
    duration_minutes: int
    capacity: int
    created_at: datetime | None = None


class SessionDetailResponse(SessionResponse):
    """Schema for session response with its booked seats."""

    booked_seats: list[int] = []
    available_seat_count: int = 0
