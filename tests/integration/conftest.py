"""Shared fixtures for SQLite-backed tests.

Each test gets its own database file. The schema is created with a
synchronous engine so no async connection outlives the loop that made it;
the async engine uses a NullPool for the same reason.
"""

from pathlib import Path

import pytest
from sqlalchemy import create_engine, insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from usergate.infrastructure.persistence.sqlalchemy.engine import build_engine
from usergate.infrastructure.persistence.sqlalchemy.models import Base, UserModel


@pytest.fixture
def database_path(tmp_path: Path) -> Path:
    """Create an empty users schema in a fresh SQLite file."""
    path = tmp_path / "usergate-test.db"
    sync_engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()
    return path


@pytest.fixture
def database_url(database_path: Path) -> str:
    return f"sqlite+aiosqlite:///{database_path}"


@pytest.fixture
def session_maker(database_url: str) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        build_engine(database_url),
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def insert_user_row(database_path: Path):
    """Write a users row directly, bypassing the service layer.

    Used to seed legacy rows (plaintext passwords, arbitrary status values).
    Keys are column names, so the credential goes in ``password``.
    """

    def _insert(**values) -> int:
        engine = create_engine(f"sqlite:///{database_path}")
        try:
            with engine.begin() as conn:
                result = conn.execute(insert(UserModel.__table__).values(**values))
                return result.inserted_primary_key[0]
        finally:
            engine.dispose()

    return _insert
