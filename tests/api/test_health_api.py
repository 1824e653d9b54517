import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError


class UnreachableDatabase:
    async def ping(self) -> bool:
        raise OperationalError("SELECT 1", {}, Exception("database is down"))


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_database_health(client: AsyncClient) -> None:
    response = await client.get("/health/db")

    assert response.status_code == 200
    assert response.json()["database"] == "ok"


@pytest.mark.asyncio
async def test_database_health_reports_unreachable_database(app, client: AsyncClient) -> None:
    app.state.database = UnreachableDatabase()

    response = await client.get("/health/db")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"
    assert response.json()["database"] == "unreachable"
