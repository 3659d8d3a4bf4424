"""
Socket pool - per-server cache of open query sockets.

Sockets are handed back after a query round and reused by the next one
(most recently returned first). The pool owns every handle it holds until
it is taken out again with get() or closed by cleanse().
"""
from __future__ import annotations

import threading
from typing import Generic, List, Optional, Protocol, Set, TypeVar, runtime_checkable

from gameq.exceptions import SocketError
from gameq.logging import get_logger

logger = get_logger("pool")


@runtime_checkable
class SocketHandle(Protocol):
    """Anything the pool can hold: an open handle that can be closed."""

    def close(self) -> None: ...


H = TypeVar("H", bound=SocketHandle)


class SocketPool(Generic[H]):
    """
    LIFO pool of open socket handles.

    All operations take an internal lock, so a pool shared with worker
    threads stays consistent. Exclusive use of a handle once it has been
    taken out is up to the caller.
    """

    def __init__(self, owner: Optional[str] = None):
        self.owner = owner
        self._sockets: List[H] = []
        self._pooled: Set[int] = set()  # id() of every pooled handle
        self._lock = threading.Lock()

    def add(self, handle: H) -> None:
        """
        Return a handle to the pool.

        Raises:
            SocketError: If the handle is already pooled
        """
        with self._lock:
            if id(handle) in self._pooled:
                raise SocketError(
                    "Socket is already in the pool",
                    {"owner": self.owner},
                )
            self._sockets.append(handle)
            self._pooled.add(id(handle))

    def get(self) -> Optional[H]:
        """Take the most recently added handle out of the pool, None when empty"""
        with self._lock:
            if not self._sockets:
                return None
            handle = self._sockets.pop()
            self._pooled.discard(id(handle))
            return handle

    def cleanse(self) -> int:
        """
        Close every pooled handle and empty the pool.

        Each handle gets one close() attempt; a failing close is logged and
        the remaining handles are still closed.

        Returns:
            Number of handles that were in the pool
        """
        with self._lock:
            sockets, self._sockets = self._sockets, []
            self._pooled.clear()

        for handle in sockets:
            try:
                handle.close()
            except Exception as e:
                logger.warning(
                    "socket_close_failed",
                    owner=self.owner,
                    error=str(e),
                    error_type=type(e).__name__,
                )

        if sockets:
            logger.debug("socket_pool_cleansed", owner=self.owner, closed=len(sockets))
        return len(sockets)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sockets)

    def __bool__(self) -> bool:
        return len(self) > 0
