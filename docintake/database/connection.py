from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool

from docintake.config.settings import Settings

APPLICATION_NAME = "docintake-worker"

_pool: ConnectionPool | None = None


def build_conninfo(settings: Settings) -> str:
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
        connect_timeout=settings.db_connect_timeout_seconds,
        application_name=APPLICATION_NAME,
    )


def init_pool(settings: Settings) -> None:
    """Open the global pool and wait until min_size connections are ready.

    Raises:
        psycopg_pool.PoolTimeout: if the database is unreachable.
    """
    global _pool  # noqa: PLW0603
    pool = ConnectionPool(
        build_conninfo(settings),
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        open=True,
    )
    try:
        pool.wait(timeout=settings.db_connect_timeout_seconds)
    except Exception:
        pool.close()
        raise
    _pool = pool


def close_pool() -> None:
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a pooled connection. Caller manages commit/rollback."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn
