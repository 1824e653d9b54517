"""Integration tests for SeatLedger against a SQLite database."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError

from seatbook.database import Database
from seatbook.ledger import SeatConstraintViolation, SeatLedger
from seatbook.models.booking import Booking, BookingStatus


async def _count_bookings(database: Database, session_id: int) -> int:
    async with database.session() as db:
        result = await db.execute(
            select(func.count(Booking.id)).where(Booking.session_id == session_id)
        )
        return result.scalar_one()


class TestTransactionBoundary:
    @pytest.mark.asyncio
    async def test_commit_persists_booking(
        self, ledger: SeatLedger, database: Database, make_session
    ) -> None:
        session = await make_session(capacity=2)

        tx = await ledger.begin()
        booking = await tx.insert_booking(session.id, 1, BookingStatus.CONFIRMED, "user-1")
        await tx.commit()

        assert booking.id is not None
        assert booking.booking_reference.startswith("BK-")
        assert booking.created_at is not None
        assert booking.active_seat_number == 1
        assert await _count_bookings(database, session.id) == 1

    @pytest.mark.asyncio
    async def test_rollback_discards_booking(
        self, ledger: SeatLedger, database: Database, make_session
    ) -> None:
        session = await make_session(capacity=2)

        tx = await ledger.begin()
        await tx.insert_booking(session.id, 1, BookingStatus.CONFIRMED)
        await tx.rollback()

        assert await _count_bookings(database, session.id) == 0

    @pytest.mark.asyncio
    async def test_exception_in_block_rolls_back(
        self, ledger: SeatLedger, database: Database, make_session
    ) -> None:
        session = await make_session(capacity=2)

        with pytest.raises(RuntimeError):
            async with ledger.transaction() as tx:
                await tx.insert_booking(session.id, 1, BookingStatus.CONFIRMED)
                raise RuntimeError("abort")

        assert await _count_bookings(database, session.id) == 0

    @pytest.mark.asyncio
    async def test_failed_commit_rolls_back(
        self,
        ledger: SeatLedger,
        database: Database,
        make_session,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        session = await make_session(capacity=2)
        tx = await ledger.begin()
        await tx.insert_booking(session.id, 1, BookingStatus.CONFIRMED)

        async def failing_commit() -> None:
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        rollbacks = []
        real_rollback = tx.db.rollback

        async def recording_rollback() -> None:
            rollbacks.append(True)
            await real_rollback()

        monkeypatch.setattr(tx.db, "commit", failing_commit)
        monkeypatch.setattr(tx.db, "rollback", recording_rollback)

        with pytest.raises(OperationalError):
            await tx.commit()

        assert rollbacks == [True]
        assert await _count_bookings(database, session.id) == 0


class TestLocks:
    @pytest.mark.asyncio
    async def test_lock_session_returns_capacity(self, ledger: SeatLedger, make_session) -> None:
        session = await make_session(capacity=5)

        async with ledger.transaction() as tx:
            locked = await tx.lock_session(session.id)

        assert locked is not None
        assert locked.capacity == 5

    @pytest.mark.asyncio
    async def test_lock_session_missing(self, ledger: SeatLedger) -> None:
        async with ledger.transaction() as tx:
            assert await tx.lock_session(12345) is None

    @pytest.mark.asyncio
    async def test_lock_occupancy_ignores_cancelled_bookings(
        self, ledger: SeatLedger, make_session
    ) -> None:
        session = await make_session(capacity=4)

        async with ledger.transaction() as tx:
            await tx.insert_booking(session.id, 1, BookingStatus.CONFIRMED)
            await tx.insert_booking(session.id, 2, BookingStatus.PENDING)
            await tx.insert_booking(session.id, 3, BookingStatus.CANCELLED)

        async with ledger.transaction() as tx:
            occupied = await tx.lock_occupancy(session.id)

        assert occupied == {1, 2}


class TestUniqueness:
    @pytest.mark.asyncio
    async def test_duplicate_active_seat_raises_constraint_violation(
        self, ledger: SeatLedger, database: Database, make_session
    ) -> None:
        session = await make_session(capacity=3)
        async with ledger.transaction() as tx:
            await tx.insert_booking(session.id, 2, BookingStatus.CONFIRMED)

        with pytest.raises(SeatConstraintViolation) as exc_info:
            async with ledger.transaction() as tx:
                await tx.insert_booking(session.id, 2, BookingStatus.CONFIRMED)

        assert exc_info.value.session_id == session.id
        assert exc_info.value.seat_number == 2
        assert await _count_bookings(database, session.id) == 1

    @pytest.mark.asyncio
    async def test_cancelled_booking_does_not_hold_the_seat(
        self, ledger: SeatLedger, make_session
    ) -> None:
        session = await make_session(capacity=3)

        async with ledger.transaction() as tx:
            cancelled = await tx.insert_booking(session.id, 2, BookingStatus.CANCELLED)
            confirmed = await tx.insert_booking(session.id, 2, BookingStatus.CONFIRMED)

        assert cancelled.active_seat_number is None
        assert confirmed.active_seat_number == 2

    @pytest.mark.asyncio
    async def test_same_seat_in_different_sessions(self, ledger: SeatLedger, make_session) -> None:
        first = await make_session(capacity=3)
        second = await make_session(capacity=3, title="Evening Stretch")

        async with ledger.transaction() as tx:
            await tx.insert_booking(first.id, 1, BookingStatus.CONFIRMED)
            await tx.insert_booking(second.id, 1, BookingStatus.CONFIRMED)

    @pytest.mark.asyncio
    async def test_missing_session_is_not_a_seat_conflict(self, ledger: SeatLedger) -> None:
        with pytest.raises(IntegrityError):
            async with ledger.transaction() as tx:
                await tx.insert_booking(999, 1, BookingStatus.CONFIRMED)
