from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool

from fara_tracker.config.settings import Settings

# Ingestion is sequential; the spare connections serve summary queries.
POOL_MAX_SIZE = 4
POOL_WAIT_SECONDS = 10.0

_pool: ConnectionPool | None = None


def build_conninfo(settings: Settings) -> str:
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
        application_name="fara_tracker",
    )


def init_pool(settings: Settings) -> None:
    """Open the global pool and block until it holds a working connection.

    Raises:
        psycopg_pool.PoolTimeout: if no connection is established in time.
            It subclasses ``psycopg.OperationalError``.
    """
    global _pool  # noqa: PLW0603
    pool = ConnectionPool(
        build_conninfo(settings),
        min_size=1,
        max_size=POOL_MAX_SIZE,
        name="fara_tracker",
        open=True,
    )
    try:
        pool.wait(timeout=POOL_WAIT_SECONDS)
    except Exception:
        pool.close()
        raise
    _pool = pool


def close_pool() -> None:
    """Close the global connection pool."""
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a connection from the pool. Caller manages commit/rollback."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn
