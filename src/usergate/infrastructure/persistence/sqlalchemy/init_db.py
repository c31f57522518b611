"""Database initialization utilities."""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

# Import models to register with Base.metadata
import usergate.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from usergate.infrastructure.persistence.sqlalchemy.models.base import Base

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring all database tables exist...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema is up to date")


async def check_connection(engine: AsyncEngine) -> bool:
    """Borrow one pooled connection and run ``SELECT 1``."""
    async with engine.connect() as conn:
        result = await conn.execute(text("SELECT 1"))
        return result.scalar_one() == 1
