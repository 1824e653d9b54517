"""Bookings API endpoints."""

from fastapi import APIRouter, HTTPException, status

from seatbook.api.v1.dependencies import (
    AllocationServiceDep,
    BookingCaller,
    BookingServiceDep,
    CurrentUser,
)
from seatbook.schemas.booking import (
    AllocationResponse,
    BookingCreate,
    BookingResponse,
    BookingStatus,
    UserBookingResponse,
)
from seatbook.services.allocation_service import (
    AllocationError,
    InvalidRequestError,
    InvalidSeatError,
    SeatTakenError,
    SessionNotFoundError,
    StorageError,
)

router = APIRouter()

ALLOCATION_ERROR_STATUS = {
    InvalidRequestError: status.HTTP_400_BAD_REQUEST,
    InvalidSeatError: status.HTTP_400_BAD_REQUEST,
    SessionNotFoundError: status.HTTP_404_NOT_FOUND,
    SeatTakenError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@router.post(
    "",
    response_model=AllocationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book a seat",
)
async def create_booking(
    booking_data: BookingCreate,
    caller: BookingCaller,
    allocation_service: AllocationServiceDep,
) -> AllocationResponse:
    """
    Book one seat of a session.

    The session row and its booked seats are locked for the duration of the
    transaction, so simultaneous requests for the same seat get exactly one
    success and a 409 for the rest.
    """
    try:
        booking = await allocation_service.allocate(
            session_id=booking_data.session_id,
            seat_number=booking_data.seat_number,
            caller_id=caller,
        )
    except AllocationError as e:
        raise HTTPException(
            status_code=ALLOCATION_ERROR_STATUS.get(
                type(e), status.HTTP_400_BAD_REQUEST
            ),
            detail=e.message,
        )

    return AllocationResponse(
        status=BookingStatus.CONFIRMED,
        booking=BookingResponse.model_validate(booking),
    )


@router.get(
    "",
    response_model=list[BookingResponse],
    summary="List bookings",
)
async def list_bookings(
    booking_service: BookingServiceDep,
    session_id: int | None = None,
) -> list[BookingResponse]:
    """List bookings, optionally only those of one session."""
    bookings = await booking_service.list_bookings(session_id=session_id)
    return [BookingResponse.model_validate(b) for b in bookings]


@router.get(
    "/me",
    response_model=list[UserBookingResponse],
    summary="Get user bookings",
)
async def get_user_bookings(
    current_user: CurrentUser,
    booking_service: BookingServiceDep,
) -> list[UserBookingResponse]:
    """Get all bookings for the current user."""
    bookings = await booking_service.get_user_bookings(current_user)
    return [UserBookingResponse.model_validate(b) for b in bookings]


@router.get(
    "/reference/{reference}",
    response_model=BookingResponse,
    summary="Get booking by reference",
)
async def get_booking_by_reference(
    reference: str,
    booking_service: BookingServiceDep,
) -> BookingResponse:
    """Get booking by booking reference."""
    booking = await booking_service.get_booking_by_reference(reference)
    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )
    return BookingResponse.model_validate(booking)


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get booking details",
)
async def get_booking(
    booking_id: int,
    booking_service: BookingServiceDep,
) -> BookingResponse:
    """Get booking by ID."""
    booking = await booking_service.get_booking(booking_id)
    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )
    return BookingResponse.model_validate(booking)
