"""Process-wide PostgreSQL connection pool for the dedup and record store."""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool, PoolTimeout

from slipstage.config.settings import Settings
from slipstage.database.exceptions import DatabaseUnavailable
from slipstage.logging.logger import Log

_pool: ConnectionPool | None = None


def build_conninfo(settings: Settings) -> str:
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
        connect_timeout=settings.db_connect_timeout_seconds,
        application_name="slipstage",
    )


def init_pool(settings: Settings) -> None:
    """Open the global pool and wait until its first connections are ready.

    Raises:
        DatabaseUnavailable: if no connection is established within
            ``db_connect_timeout_seconds``.
    """
    global _pool  # noqa: PLW0603
    pool = ConnectionPool(
        build_conninfo(settings),
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        name="slipstage",
        open=True,
    )
    try:
        pool.wait(timeout=settings.db_connect_timeout_seconds)
    except PoolTimeout as exc:
        pool.close()
        Log.error(
            "Database",
            f"Cannot reach {settings.db_host}:{settings.db_port}/{settings.db_database}",
        )
        raise DatabaseUnavailable(
            f"PostgreSQL at {settings.db_host}:{settings.db_port} is unreachable: {exc}"
        ) from exc
    _pool = pool
    Log.info(
        "Database",
        f"Connection pool ready ({settings.db_pool_min_size}-{settings.db_pool_max_size})",
    )


def close_pool() -> None:
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a pooled connection. Caller commits."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn
