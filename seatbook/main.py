"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from seatbook.api.v1.router import router as v1_router
from seatbook.config import get_settings
from seatbook.database import Database
from seatbook.schemas.common import ErrorResponse, HealthResponse


settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting Seatbook API...")

    database = Database.from_settings(settings)
    app.state.database = database
    logger.info("Database engine created")

    if settings.CREATE_TABLES_ON_STARTUP:
        await database.create_tables()

    yield

    # Shutdown
    logger.info("Shutting down Seatbook API...")

    await database.dispose()
    logger.info("Database connections closed")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
## Seatbook API

Seat booking for sessions with a fixed capacity.

### Seat allocation
- **Row locking**: the session row and its booked seats are locked while a
  booking is checked and written
- **Unique constraint**: one active booking per seat per session, enforced by
  the database
- **Atomic**: a rejected booking leaves nothing behind

### Identity
The `X-User-ID` header carries the caller's user ID and `X-User-Role` its
role (`USER` or `ADMIN`). Both are set by the authentication layer in front
of this service. Creating sessions requires `ADMIN`.

### Responses for `POST /api/v1/bookings`
- `201` booking confirmed
- `400` missing, malformed or out-of-range seat
- `404` session not found
- `409` seat already booked
- `503` storage failure, safe to retry
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(v1_router, prefix="/api")

    # Health check endpoints
    @app.get("/health", tags=["Health"], response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=settings.APP_VERSION)

    @app.get("/health/db", tags=["Health"], response_model=HealthResponse)
    async def database_health_check(request: Request):
        """Check that the database answers queries."""
        try:
            await request.app.state.database.ping()
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return JSONResponse(
                status_code=503,
                content=HealthResponse(
                    status="unhealthy",
                    version=settings.APP_VERSION,
                    database="unreachable",
                ).model_dump(),
            )
        return HealthResponse(
            status="healthy", version=settings.APP_VERSION, database="ok"
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal Server Error",
                detail=str(exc) if settings.DEBUG else None,
                timestamp=datetime.now(),
            ).model_dump(mode="json"),
        )

    return app


# Create application instance
app = create_app()


def run():
    """Run the application with uvicorn."""
    uvicorn.run(
        "seatbook.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
