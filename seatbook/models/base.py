"""Declarative base for SQLAlchemy models."""

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import DeclarativeBase

# SQLite only auto-increments INTEGER PRIMARY KEY columns
BigIntId = BigInteger().with_variant(Integer, "sqlite")

# Largest value a signed 64-bit id column can hold
MAX_ROW_ID = 2**63 - 1


class Base(DeclarativeBase):
    """Base class for all models."""

    pass
