"""Durable seat ledger backed by the relational database."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from seatbook.models.booking import (
    ACTIVE_BOOKING_STATUSES,
    SEAT_UNIQUE_CONSTRAINT,
    Booking,
    BookingStatus,
)
from seatbook.models.session import Session


class SeatConstraintViolation(Exception):
    """Raised when an insert breaks the one-active-booking-per-seat constraint."""

    def __init__(self, session_id: int, seat_number: int):
        super().__init__(
            f"Seat {seat_number} of session {session_id} already has an active booking"
        )
        self.session_id = session_id
        self.seat_number = seat_number


def _is_seat_conflict(exc: IntegrityError) -> bool:
    """Tell a seat uniqueness violation apart from other integrity errors."""
    message = str(exc.orig)
    # MySQL and PostgreSQL name the constraint, SQLite lists its columns
    return SEAT_UNIQUE_CONSTRAINT in message or "active_seat_number" in message


class LedgerTransaction:
    """
    One unit of work against the seat ledger.

    Locks taken through this object are held until commit() or rollback().
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def lock_session(self, session_id: int) -> Session | None:
        """
        Lock the session row for the rest of the transaction.

        Returns:
            The session, or None if it does not exist.
        """
        result = await self.db.execute(
            select(Session).where(Session.id == session_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def lock_occupancy(self, session_id: int) -> set[int]:
        """
        Lock every active booking row of a session.

        Returns:
            Seat numbers currently held by PENDING or CONFIRMED bookings.
        """
        result = await self.db.execute(
            select(Booking.seat_number)
            .where(
                Booking.session_id == session_id,
                Booking.status.in_(ACTIVE_BOOKING_STATUSES),
            )
            .order_by(Booking.seat_number)
            .with_for_update()
        )
        return set(result.scalars().all())

    async def insert_booking(
        self,
        session_id: int,
        seat_number: int,
        status: BookingStatus,
        caller_id: str | None = None,
    ) -> Booking:
        """
        Insert a booking row.

        Raises:
            SeatConstraintViolation: If the seat already has an active booking
        """
        booking = Booking(
            session_id=session_id,
            seat_number=seat_number,
            status=status,
            user_id=caller_id,
        )
        self.db.add(booking)
        try:
            await self.db.flush()
        except IntegrityError as e:
            if _is_seat_conflict(e):
                raise SeatConstraintViolation(session_id, seat_number) from e
            raise

        # Load server-side defaults (timestamps, generated column)
        await self.db.refresh(booking)
        return booking

    async def commit(self) -> None:
        """
        Commit the unit of work and release the connection.

        A failed commit is rolled back before the error propagates.
        """
        try:
            await self.db.commit()
        except BaseException:
            await self.db.rollback()
            raise
        finally:
            await self.db.close()

    async def rollback(self) -> None:
        """Discard the unit of work and release the connection."""
        try:
            await self.db.rollback()
        finally:
            await self.db.close()


class SeatLedger:
    """Transactional storage for sessions and their seat bookings."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def begin(self) -> LedgerTransaction:
        """Start a new unit of work."""
        db = self.session_factory()
        await db.begin()
        return LedgerTransaction(db)

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[LedgerTransaction, None]:
        """
        Run a block inside one unit of work.

        Usage:
            async with ledger.transaction() as tx:
                session = await tx.lock_session(session_id)
                ...

        Commits when the block exits normally. Any exception, including task
        cancellation, rolls the work back before it propagates.
        """
        tx = await self.begin()
        try:
            yield tx
        except BaseException:
            await tx.rollback()
            raise
        await tx.commit()
