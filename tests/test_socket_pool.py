"""
Tests for SocketPool.
"""
import threading
from unittest.mock import MagicMock

import pytest

from gameq.exceptions import SocketError
from gameq.pool import SocketHandle, SocketPool


class TestSocketPool:
    @pytest.fixture
    def pool(self):
        return SocketPool(owner="1.2.3.4:27015")

    def test_lifo_reuse(self, pool):
        a, b = MagicMock(), MagicMock()
        pool.add(a)
        pool.add(b)

        assert pool.get() is b
        assert pool.get() is a
        assert pool.get() is None

    def test_len_and_bool(self, pool):
        assert not pool
        pool.add(MagicMock())
        assert len(pool) == 1
        assert pool

    def test_double_add_rejected(self, pool):
        handle = MagicMock()
        pool.add(handle)

        with pytest.raises(SocketError):
            pool.add(handle)
        assert len(pool) == 1

    def test_cleanse_closes_each_handle_once(self, pool):
        handles = [MagicMock() for _ in range(3)]
        for handle in handles:
            pool.add(handle)

        assert pool.cleanse() == 3

        for handle in handles:
            handle.close.assert_called_once_with()
        assert pool.get() is None

    def test_cleanse_continues_after_close_failure(self, pool):
        failing = MagicMock()
        failing.close.side_effect = OSError("already gone")
        healthy = MagicMock()
        pool.add(failing)
        pool.add(healthy)

        pool.cleanse()

        failing.close.assert_called_once_with()
        healthy.close.assert_called_once_with()
        assert len(pool) == 0

    def test_cleanse_is_idempotent(self, pool):
        handle = MagicMock()
        pool.add(handle)

        pool.cleanse()
        assert pool.cleanse() == 0
        handle.close.assert_called_once_with()

    def test_concurrent_adds(self, pool):
        handles = [MagicMock() for _ in range(200)]

        def worker(chunk):
            for handle in chunk:
                pool.add(handle)

        threads = [threading.Thread(target=worker, args=(handles[i::4],)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(pool) == 200

    def test_socket_handle_protocol(self):
        class Closeable:
            def close(self):
                pass

        assert isinstance(Closeable(), SocketHandle)
        assert not isinstance(object(), SocketHandle)

    def test_handle_can_return_after_get(self, pool):
        handle = MagicMock()
        pool.add(handle)
        assert pool.get() is handle

        pool.add(handle)
        assert pool.get() is handle

    def test_handle_can_return_after_cleanse(self, pool):
        handle = MagicMock()
        pool.add(handle)
        pool.cleanse()

        pool.add(handle)
        assert len(pool) == 1
