"""
Query socket abstraction

A query socket is the handle the event loop opens against a server's query
port and hands back to the server's socket pool between rounds.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

from gameq.config import settings
from gameq.protocols.base import TransportProtocol


class QueryCore(ABC):
    """
    Base class for query socket implementations.

    The underlying socket is created lazily by get_socket(), so constructing
    a QueryCore never touches the network.
    """

    def __init__(
        self,
        transport: TransportProtocol,
        ip: str,
        port: int,
        timeout: Optional[float] = None,
        blocking: bool = False,
    ):
        """
        Args:
            transport: UDP or TCP
            ip: IPv4 or IPv6 literal (no brackets)
            port: Query port
            timeout: Socket timeout in seconds, settings.socket_timeout_sec by default
            blocking: Blocking mode for the socket
        """
        self.transport = TransportProtocol(transport)
        self.ip = ip
        self.port = port
        self.timeout = settings.socket_timeout_sec if timeout is None else timeout
        self.blocking = blocking
        self.socket: Any = None

    def get_socket(self) -> Any:
        """Return the underlying socket, creating it on first use"""
        if self.socket is None:
            self.create()
        return self.socket

    @property
    def is_open(self) -> bool:
        return self.socket is not None

    @abstractmethod
    def create(self) -> None:
        """Create and connect the underlying socket"""
        pass

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Send data, returns the number of bytes written"""
        pass

    @abstractmethod
    def read(self, length: Optional[int] = None) -> bytes:
        """Read up to ``length`` bytes"""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the socket. Safe to call more than once."""
        pass

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"<{type(self).__name__} {self.transport.value} {self.ip}:{self.port} {state}>"
