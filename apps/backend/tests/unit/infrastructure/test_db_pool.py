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


@pytest.fixture(autouse=True)
def _clean_pool():
    from projecthub.infrastructure.db.pool import reset_pool

    reset_pool()
    yield
    reset_pool()


@pytest.mark.unit
class TestPoolLifecycle:
    """Test pool initialization and cleanup."""

    def test_init_pool_creates_pool(self):
        from projecthub.infrastructure.db.pool import init_pool

        with patch("projecthub.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            result = init_pool("postgresql://test", min_size=2, max_size=10)

            MockPool.assert_called_once()
            assert MockPool.call_args.kwargs["min_size"] == 2
            assert result == mock_pool

    def test_init_pool_twice_raises_error(self):
        from projecthub.infrastructure.db import PoolAlreadyInitializedError
        from projecthub.infrastructure.db.pool import init_pool

        with patch("projecthub.infrastructure.db.pool.ConnectionPool"):
            init_pool("postgresql://test", min_size=2, max_size=10)

            with pytest.raises(PoolAlreadyInitializedError):
                init_pool("postgresql://test", min_size=2, max_size=10)

    def test_get_pool_without_init_raises_error(self):
        from projecthub.infrastructure.db import PoolNotInitializedError
        from projecthub.infrastructure.db.pool import get_pool

        with pytest.raises(PoolNotInitializedError):
            get_pool()

    def test_close_pool_clears_singleton(self):
        from projecthub.infrastructure.db import PoolNotInitializedError
        from projecthub.infrastructure.db.pool import close_pool, get_pool, init_pool

        with patch("projecthub.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            init_pool("postgresql://test", min_size=2, max_size=10)
            close_pool()

            mock_pool.close.assert_called_once()
            with pytest.raises(PoolNotInitializedError):
                get_pool()

    def test_close_pool_is_idempotent(self):
        from projecthub.infrastructure.db.pool import close_pool

        close_pool()
        close_pool()


@pytest.mark.unit
class TestPing:
    def test_ping_true_when_select_one_answers(self):
        from projecthub.infrastructure.db.pool import init_pool, ping

        with patch("projecthub.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            conn = mock_pool.connection.return_value.__enter__.return_value
            conn.execute.return_value.fetchone.return_value = (1,)
            MockPool.return_value = mock_pool

            init_pool("postgresql://test", min_size=1, max_size=1)

            assert ping() is True
