"""
Name: Database Pool Tests

Responsibilities:
  - Test pool lifecycle (init, get, close, reset)
  - Test readiness ping
  - Offline unit tests (no real DB)

Notes:
  - Uses mocking for ConnectionPool
  - Tests pool singleton behavior
"""

from unittest.mock import MagicMock, patch

import pytest

from app.infrastructure.db.errors import (
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)
from app.infrastructure.db.pool import (
    close_pool,
    get_pool,
    init_pool,
    is_pool_initialized,
    ping,
    reset_pool,
)


@pytest.fixture(autouse=True)
def _clean_pool():
    reset_pool()
    yield
    reset_pool()


@pytest.mark.unit
class TestPoolLifecycle:
    """Test pool initialization and cleanup."""

    def test_init_pool_creates_pool(self):
        with patch("app.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            result = init_pool("postgresql://test", min_size=2, max_size=10)

            MockPool.assert_called_once()
            kwargs = MockPool.call_args.kwargs
            assert kwargs["conninfo"] == "postgresql://test"
            assert kwargs["min_size"] == 2
            assert kwargs["max_size"] == 10
            assert result is mock_pool
            assert is_pool_initialized() is True

    def test_init_pool_twice_raises_error(self):
        with patch("app.infrastructure.db.pool.ConnectionPool"):
            init_pool("postgresql://test", min_size=1, max_size=2)

            with pytest.raises(PoolAlreadyInitializedError):
                init_pool("postgresql://test", min_size=1, max_size=2)

    def test_get_pool_without_init_raises_error(self):
        with pytest.raises(PoolNotInitializedError):
            get_pool()

    def test_close_pool_clears_singleton(self):
        with patch("app.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool
            init_pool("postgresql://test", min_size=1, max_size=2)

            close_pool()

            mock_pool.close.assert_called_once()
            assert is_pool_initialized() is False
            with pytest.raises(PoolNotInitializedError):
                get_pool()

    def test_close_pool_is_idempotent(self):
        close_pool()
        close_pool()

        assert is_pool_initialized() is False

    def test_reset_pool_forgets_pool_even_if_close_fails(self):
        with patch("app.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            mock_pool.close.side_effect = RuntimeError("boom")
            MockPool.return_value = mock_pool
            init_pool("postgresql://test", min_size=1, max_size=2)

            reset_pool()

            assert is_pool_initialized() is False


@pytest.mark.unit
class TestStatementTimeout:
    def test_configure_sets_statement_timeout(self):
        with patch("app.infrastructure.db.pool.ConnectionPool") as MockPool:
            init_pool(
                "postgresql://test", min_size=1, max_size=2, statement_timeout_ms=1500
            )
            configure = MockPool.call_args.kwargs["configure"]

        conn = MagicMock()
        configure(conn)

        conn.execute.assert_called_once_with("SET statement_timeout = 1500")
        conn.commit.assert_called_once()

    def test_zero_timeout_skips_configuration(self):
        with patch("app.infrastructure.db.pool.ConnectionPool") as MockPool:
            init_pool("postgresql://test", min_size=1, max_size=2)
            configure = MockPool.call_args.kwargs["configure"]

        conn = MagicMock()
        configure(conn)

        conn.execute.assert_not_called()


@pytest.mark.unit
class TestPing:
    def test_ping_without_pool_is_false(self):
        assert ping() is False

    def test_ping_runs_select_one(self):
        with patch("app.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool
            init_pool("postgresql://test", min_size=1, max_size=2)

            assert ping() is True

        conn = mock_pool.connection.return_value.__enter__.return_value
        conn.execute.assert_called_once_with("SELECT 1")

    def test_ping_failure_is_false(self):
        with patch("app.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            mock_pool.connection.side_effect = OSError("unreachable")
            MockPool.return_value = mock_pool
            init_pool("postgresql://test", min_size=1, max_size=2)

            assert ping() is False
