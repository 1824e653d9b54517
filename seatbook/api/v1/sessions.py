"""Sessions API endpoints."""

from fastapi import APIRouter, HTTPException, status

from seatbook.api.v1.dependencies import AdminUser, SessionServiceDep
from seatbook.schemas.session import (
    SessionCreate,
    SessionDetailResponse,
    SessionResponse,
)

router = APIRouter()


@router.post(
    "",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new session",
)
async def create_session(
    session_data: SessionCreate,
    admin_user: AdminUser,
    session_service: SessionServiceDep,
) -> SessionResponse:
    """Create a new session. Requires the ADMIN role."""
    session = await session_service.create_session(session_data)
    return SessionResponse.model_validate(session)


@router.get(
    "",
    response_model=list[SessionResponse],
    summary="List sessions",
)
async def list_sessions(
    session_service: SessionServiceDep,
) -> list[SessionResponse]:
    """List all sessions ordered by date and start time."""
    sessions = await session_service.list_sessions()
    return [SessionResponse.model_validate(s) for s in sessions]


@router.get(
    "/{session_id}",
    response_model=SessionDetailResponse,
    summary="Get session details",
)
async def get_session(
    session_id: int,
    session_service: SessionServiceDep,
) -> SessionDetailResponse:
    """Get session details with booked seats."""
    result = await session_service.get_session_with_booked_seats(session_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        )

    session = result["session"]
    booked_seats = result["booked_seats"]
    return SessionDetailResponse(
        id=session.id,
        title=session.title,
        description=session.description,
        session_date=session.session_date,
        start_time=session.start_time,
        duration_minutes=session.duration_minutes,
        capacity=session.capacity,
        created_at=session.created_at,
        booked_seats=booked_seats,
        available_seat_count=session.capacity - len(booked_seats),
    )


@router.get(
    "/{session_id}/seats",
    response_model=list[int],
    summary="Get booked seats",
)
async def get_booked_seats(
    session_id: int,
    session_service: SessionServiceDep,
) -> list[int]:
    """
    Get the booked seat numbers of a session.

    This is a plain read and may be stale by the time it is returned.
    """
    session = await session_service.get_session(session_id)
    if not session:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        )
    return await session_service.get_booked_seats(session_id)
