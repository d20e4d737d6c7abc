from unittest.mock import MagicMock, patch

import pytest

from fara_tracker.config.settings import Settings
from fara_tracker.database import connection


def _settings() -> Settings:
    return Settings(
        db_host="db.internal",
        db_port=5433,
        db_database="fara",
        db_username="loader",
        db_password="pw",
    )


class TestBuildConninfo:
    def test_contains_all_settings(self) -> None:
        conninfo = connection.build_conninfo(_settings())
        for part in (
            "host=db.internal",
            "port=5433",
            "dbname=fara",
            "user=loader",
            "password=pw",
            "application_name=fara_tracker",
        ):
            assert part in conninfo


class TestPoolLifecycle:
    def test_get_connection_requires_pool(self) -> None:
        connection.close_pool()
        with pytest.raises(RuntimeError, match="not initialized"):
            with connection.get_connection():
                pass

    @patch("fara_tracker.database.connection.ConnectionPool")
    def test_failed_wait_closes_pool(self, mock_pool_cls: MagicMock) -> None:
        mock_pool_cls.return_value.wait.side_effect = TimeoutError("no server")

        with pytest.raises(TimeoutError):
            connection.init_pool(_settings())

        mock_pool_cls.return_value.close.assert_called_once()
        assert connection._pool is None

    @patch("fara_tracker.database.connection.ConnectionPool")
    def test_init_then_close(self, mock_pool_cls: MagicMock) -> None:
        connection.init_pool(_settings())
        assert connection._pool is mock_pool_cls.return_value

        connection.close_pool()

        mock_pool_cls.return_value.close.assert_called_once()
        assert connection._pool is None
