"""Session catalog service."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from seatbook.config import get_settings
from seatbook.models.booking import ACTIVE_BOOKING_STATUSES, Booking
from seatbook.models.session import Session
from seatbook.schemas.session import SessionCreate

settings = get_settings()


class SessionService:
    """Service for session catalog operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_session(self, session_data: SessionCreate) -> Session:
        """Create a new session."""
        session = Session(
            title=session_data.title,
            description=session_data.description,
            session_date=session_data.session_date,
            start_time=session_data.start_time,
            duration_minutes=(
                session_data.duration_minutes
                or settings.DEFAULT_SESSION_DURATION_MINUTES
            ),
            capacity=session_data.capacity,
        )
        self.db.add(session)
        await self.db.commit()
        await self.db.refresh(session)
        return session

    async def get_session(self, session_id: int) -> Session | None:
        """Get session by ID."""
        result = await self.db.execute(
            select(Session).where(Session.id == session_id)
        )
        return result.scalar_one_or_none()

    async def list_sessions(self) -> list[Session]:
        """Get all sessions in schedule order."""
        result = await self.db.execute(
            select(Session).order_by(Session.session_date, Session.start_time)
        )
        return list(result.scalars().all())

    async def get_booked_seats(self, session_id: int) -> list[int]:
        """Get seat numbers held by active bookings, in seat order."""
        result = await self.db.execute(
            select(Booking.seat_number)
            .where(
                Booking.session_id == session_id,
                Booking.status.in_(ACTIVE_BOOKING_STATUSES),
            )
            .order_by(Booking.seat_number)
        )
        return list(result.scalars().all())

    async def get_session_with_booked_seats(self, session_id: int) -> dict | None:
        """Get session with its booked seat numbers."""
        session = await self.get_session(session_id)
        if not session:
            return None

        booked_seats = await self.get_booked_seats(session_id)

        return {
            "session": session,
            "booked_seats": booked_seats,
        }
