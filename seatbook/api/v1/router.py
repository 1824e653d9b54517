"""API v1 main router."""

from fastapi import APIRouter

from seatbook.api.v1.bookings import router as bookings_router
from seatbook.api.v1.sessions import router as sessions_router

router = APIRouter(prefix="/v1")

router.include_router(sessions_router, prefix="/sessions", tags=["Sessions"])
router.include_router(bookings_router, prefix="/bookings", tags=["Bookings"])
