"""API v1 routers package."""

from seatbook.api.v1.bookings import router as bookings_router
from seatbook.api.v1.sessions import router as sessions_router

__all__ = [
    "sessions_router",
    "bookings_router",
]
