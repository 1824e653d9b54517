"""Booking query service."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from seatbook.models.booking import Booking


class BookingService:
    """Service for reading bookings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_booking(self, booking_id: int) -> Booking | None:
        """Get booking by ID."""
        result = await self.db.execute(
            select(Booking).where(Booking.id == booking_id)
        )
        return result.scalar_one_or_none()

    async def get_booking_by_reference(self, reference: str) -> Booking | None:
        """Get booking by reference."""
        result = await self.db.execute(
            select(Booking).where(Booking.booking_reference == reference)
        )
        return result.scalar_one_or_none()

    async def list_bookings(self, session_id: int | None = None) -> list[Booking]:
        """
        List bookings.

        With a session ID, returns that session's bookings in seat order;
        otherwise all bookings, newest first.
        """
        query = select(Booking)

        if session_id is not None:
            query = query.where(Booking.session_id == session_id).order_by(
                Booking.seat_number
            )
        else:
            query = query.order_by(Booking.created_at.desc(), Booking.id.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_user_bookings(self, user_id: str) -> list[Booking]:
        """Get bookings for a user with their sessions loaded."""
        result = await self.db.execute(
            select(Booking)
            .options(selectinload(Booking.session))
            .where(Booking.user_id == user_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
        )
        return list(result.scalars().all())
