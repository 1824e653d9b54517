from seatbook.config import Settings


def test_database_url_defaults_to_mysql() -> None:
    settings = Settings(_env_file=None, DB_HOST="db", DB_PORT=3307, DB_NAME="seats")

    assert settings.database_url == "mysql+aiomysql://root:password@db:3307/seats"


def test_database_url_override() -> None:
    settings = Settings(_env_file=None, DATABASE_URL="sqlite+aiosqlite:///./local.db")

    assert settings.database_url == "sqlite+aiosqlite:///./local.db"


def test_anonymous_bookings_allowed_by_default() -> None:
    settings = Settings(_env_file=None)

    assert settings.REQUIRE_CALLER_IDENTITY is False
    assert settings.DEFAULT_SESSION_DURATION_MINUTES == 60
