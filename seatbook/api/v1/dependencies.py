"""API dependencies."""

import enum
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from seatbook.config import get_settings
from seatbook.database import Database
from seatbook.ledger import SeatLedger
from seatbook.services.allocation_service import AllocationService
from seatbook.services.booking_service import BookingService
from seatbook.services.session_service import SessionService


class UserRole(str, enum.Enum):
    """Caller role resolved by the authentication layer."""

    USER = "USER"
    ADMIN = "ADMIN"


def get_database(request: Request) -> Database:
    """Get the database handle owned by the application."""
    return request.app.state.database


DatabaseDep = Annotated[Database, Depends(get_database)]


async def get_db(database: DatabaseDep) -> AsyncGenerator[AsyncSession, None]:
    """Get a request-scoped database session."""
    async with database.session() as db:
        yield db


# Type aliases
DBSession = Annotated[AsyncSession, Depends(get_db)]


async def get_current_user_id(
    x_user_id: Annotated[str | None, Header()] = None,
) -> str | None:
    """
    Get the caller's user ID from header, if any.

    Identity is resolved by the authentication layer in front of this
    service; an absent header means an anonymous caller.
    """
    if x_user_id is None or not x_user_id.strip():
        return None
    if len(x_user_id) > 50:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-User-ID must be at most 50 characters",
        )
    return x_user_id


async def get_current_role(
    x_user_role: Annotated[str | None, Header()] = None,
) -> UserRole:
    """Get the caller's role from header, defaulting to USER."""
    if x_user_role and x_user_role.strip().upper() == UserRole.ADMIN.value:
        return UserRole.ADMIN
    return UserRole.USER


OptionalUser = Annotated[str | None, Depends(get_current_user_id)]
CurrentRole = Annotated[UserRole, Depends(get_current_role)]


async def require_user_id(user_id: OptionalUser) -> str:
    """Require an identified caller."""
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-ID header is required",
        )
    return user_id


CurrentUser = Annotated[str, Depends(require_user_id)]


async def require_admin(user_id: CurrentUser, role: CurrentRole) -> str:
    """Require an identified caller with the ADMIN role."""
    if role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user_id


AdminUser = Annotated[str, Depends(require_admin)]


async def get_booking_caller(user_id: OptionalUser) -> str | None:
    """
    Resolve the caller recorded on a new booking.

    Anonymous bookings are accepted unless REQUIRE_CALLER_IDENTITY is set.
    """
    if user_id is None and get_settings().REQUIRE_CALLER_IDENTITY:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-ID header is required",
        )
    return user_id


BookingCaller = Annotated[str | None, Depends(get_booking_caller)]


def get_seat_ledger(database: DatabaseDep) -> SeatLedger:
    """Get seat ledger."""
    return SeatLedger(database.session_factory)


def get_allocation_service(
    ledger: Annotated[SeatLedger, Depends(get_seat_ledger)],
) -> AllocationService:
    """Get allocation service."""
    return AllocationService(ledger)


def get_session_service(db: DBSession) -> SessionService:
    """Get session service."""
    return SessionService(db)


def get_booking_service(db: DBSession) -> BookingService:
    """Get booking service."""
    return BookingService(db)


# Annotated dependencies
AllocationServiceDep = Annotated[AllocationService, Depends(get_allocation_service)]
SessionServiceDep = Annotated[SessionService, Depends(get_session_service)]
BookingServiceDep = Annotated[BookingService, Depends(get_booking_service)]
