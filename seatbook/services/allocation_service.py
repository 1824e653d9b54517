"""Seat allocation with row locking and a uniqueness constraint fallback."""

import logging

from sqlalchemy.exc import SQLAlchemyError

from seatbook.ledger import SeatConstraintViolation, SeatLedger
from seatbook.models.base import MAX_ROW_ID
from seatbook.models.booking import Booking, BookingStatus

logger = logging.getLogger(__name__)


class AllocationError(Exception):
    """Base class for rejected seat allocations."""

    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(AllocationError):
    """Session or seat number missing or malformed."""

    pass


class SessionNotFoundError(AllocationError):
    """Referenced session does not exist."""

    pass


class InvalidSeatError(AllocationError):
    """Seat number outside 1..capacity."""

    pass


class SeatTakenError(AllocationError):
    """Seat already held by an active booking."""

    pass


class StorageError(AllocationError):
    """Unexpected storage failure; the whole allocation was rolled back."""

    retryable = True


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class AllocationService:
    """
    Books single seats of a session.

    Every allocation runs in one ledger transaction: the session row is
    locked, then the active booking rows of that session, so concurrent
    allocations for the same session are serialized. The unique constraint on
    (session, active seat) still rejects a duplicate if anything slips past
    the locks.
    """

    def __init__(self, ledger: SeatLedger):
        self.ledger = ledger

    async def allocate(
        self,
        session_id: int | None,
        seat_number: int | None,
        caller_id: str | None = None,
    ) -> Booking:
        """
        Book one seat of a session.

        Args:
            session_id: Session ID
            seat_number: Seat number, 1-based
            caller_id: Resolved user ID, or None for an anonymous booking

        Returns:
            The CONFIRMED booking

        Raises:
            InvalidRequestError: If session_id or seat_number is missing or not an integer
            SessionNotFoundError: If the session does not exist
            InvalidSeatError: If seat_number is outside 1..capacity
            SeatTakenError: If the seat is already booked
            StorageError: If the database failed; safe to retry
        """
        if session_id is None or seat_number is None:
            raise InvalidRequestError("session_id and seat_number are required")
        if not _is_int(session_id) or not _is_int(seat_number):
            raise InvalidRequestError("session_id and seat_number must be integers")
        if not 1 <= session_id <= MAX_ROW_ID:
            raise SessionNotFoundError(f"Session {session_id} not found")

        try:
            async with self.ledger.transaction() as tx:
                session = await tx.lock_session(session_id)
                if session is None:
                    raise SessionNotFoundError(f"Session {session_id} not found")

                if seat_number < 1 or seat_number > session.capacity:
                    raise InvalidSeatError(
                        f"Invalid seat number {seat_number}; "
                        f"session {session_id} has seats 1-{session.capacity}"
                    )

                occupied = await tx.lock_occupancy(session_id)
                if seat_number in occupied:
                    logger.info(
                        f"Seat {seat_number} of session {session_id} already booked"
                    )
                    raise SeatTakenError("Seat already booked")

                booking = await tx.insert_booking(
                    session_id=session_id,
                    seat_number=seat_number,
                    status=BookingStatus.CONFIRMED,
                    caller_id=caller_id,
                )
        except SeatConstraintViolation as e:
            logger.warning(
                f"Unique constraint rejected seat {e.seat_number} of session "
                f"{e.session_id} after the occupancy check passed"
            )
            raise SeatTakenError("Seat already booked") from e
        except SQLAlchemyError as e:
            logger.exception(
                f"Storage failure allocating seat {seat_number} of session {session_id}"
            )
            raise StorageError("Failed to create booking. Please try again.") from e

        logger.info(
            f"Booking {booking.booking_reference} confirmed: session {session_id}, "
            f"seat {seat_number}, user {caller_id or 'anonymous'}"
        )
        return booking
