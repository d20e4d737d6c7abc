import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from fara_tracker.config.settings import Settings
from fara_tracker.database.connection import close_pool, get_connection, init_pool

SCHEMA_PATH = (
    Path(__file__).resolve().parents[2] / "fara_tracker" / "database" / "schema.sql"
)


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "fara_tracker_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
    except Exception as e:
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    try:
        with get_connection() as conn:
            conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        conn.execute("TRUNCATE fara_registrations RESTART IDENTITY")
        conn.commit()
        yield conn
        conn.rollback()
