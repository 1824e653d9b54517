"""Session model."""

from datetime import date, datetime, time
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    Time,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from seatbook.models.base import Base, BigIntId

if TYPE_CHECKING:
    from seatbook.models.booking import Booking


class Session(Base):
    """Session model representing a scheduled event with a fixed seat capacity."""

    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    session_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )

    # Relationships
    bookings: Mapped[list["Booking"]] = relationship("Booking", back_populates="session")

    __table_args__ = (
        CheckConstraint("capacity >= 1", name="ck_session_capacity_positive"),
        Index("idx_session_schedule", "session_date", "start_time"),
    )
