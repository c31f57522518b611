"""Async engine construction."""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from usergate_config.settings import Settings


def build_engine(
    database_url: str,
    pool_size: int = 10,
    pool_timeout: float = 30.0,
    echo: bool = False,
) -> AsyncEngine:
    """Create an async engine with a bounded connection pool.

    The pool never grows past ``pool_size``; a caller waits up to
    ``pool_timeout`` seconds for a free connection. SQLite URLs get a
    NullPool instead, since aiosqlite connections are bound to the event
    loop that opened them.
    """
    if make_url(database_url).get_backend_name() == "sqlite":
        return create_async_engine(database_url, echo=echo, poolclass=NullPool)

    return create_async_engine(
        database_url,
        echo=echo,
        pool_size=pool_size,
        max_overflow=0,
        pool_timeout=pool_timeout,
        pool_pre_ping=True,
    )


def build_engine_from_settings(settings: Settings) -> AsyncEngine:
    return build_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        pool_timeout=settings.db_pool_timeout,
    )
