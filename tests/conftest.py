from datetime import date, time
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from seatbook.database import Database
from seatbook.ledger import SeatLedger
from seatbook.main import create_app
from seatbook.models.session import Session
from seatbook.schemas.session import SessionCreate
from seatbook.services.allocation_service import AllocationService
from seatbook.services.session_service import SessionService


@pytest.fixture
async def database(tmp_path: Path):
    # File database so that every connection sees the same data
    db_path = tmp_path / "seatbook_test.db"
    db = Database.from_url(f"sqlite+aiosqlite:///{db_path}")
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def ledger(database: Database) -> SeatLedger:
    return SeatLedger(database.session_factory)


@pytest.fixture
def allocation_service(ledger: SeatLedger) -> AllocationService:
    return AllocationService(ledger)


@pytest.fixture
def make_session(database: Database):
    async def _make(
        capacity: int = 3,
        title: str = "Morning Stretch",
        session_date: date = date(2026, 11, 2),
        start_time: time = time(9, 0),
    ) -> Session:
        async with database.session() as db:
            return await SessionService(db).create_session(
                SessionCreate(
                    title=title,
                    description="Gentle full body stretch",
                    session_date=session_date,
                    start_time=start_time,
                    capacity=capacity,
                )
            )

    return _make


@pytest.fixture
def app(database: Database):
    application = create_app()
    # ASGITransport does not run the lifespan; attach the test database directly
    application.state.database = database
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
