"""Booking model."""

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Computed,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ulid import ULID

from seatbook.models.base import Base, BigIntId

if TYPE_CHECKING:
    from seatbook.models.session import Session


class BookingStatus(str, enum.Enum):
    """Booking status enum."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


# Statuses that hold a seat
ACTIVE_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)

SEAT_UNIQUE_CONSTRAINT = "uk_booking_session_active_seat"


def generate_booking_reference() -> str:
    """Generate unique booking reference using ULID."""
    return f"BK-{str(ULID())}"


class Booking(Base):
    """Booking model representing one claimed seat of one session."""

    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    session_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("sessions.id"), nullable=False
    )
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus), nullable=False, default=BookingStatus.PENDING
    )
    # seat_number while the booking holds its seat, NULL otherwise; NULLs never
    # collide in a unique constraint, which gives a filtered uniqueness check
    active_seat_number: Mapped[int | None] = mapped_column(
        Integer,
        Computed(
            "CASE WHEN status IN ('PENDING', 'CONFIRMED') THEN seat_number END",
            persisted=True,
        ),
    )
    user_id: Mapped[str | None] = mapped_column(String(50))
    booking_reference: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, default=generate_booking_reference
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
    )

    # Relationships
    session: Mapped["Session"] = relationship("Session", back_populates="bookings")

    __table_args__ = (
        UniqueConstraint("session_id", "active_seat_number", name=SEAT_UNIQUE_CONSTRAINT),
        CheckConstraint("seat_number >= 1", name="ck_booking_seat_positive"),
        Index("idx_booking_session_status", "session_id", "status"),
        Index("idx_booking_user_id", "user_id"),
    )
