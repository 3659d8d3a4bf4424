"""
Native query socket

QueryCore implemented on top of the stdlib socket module. UDP sockets are
connected so write()/read() talk to the query port only.
"""
import socket
from typing import Optional

from gameq.address import is_ipv6
from gameq.config import settings
from gameq.exceptions import SocketError
from gameq.logging import get_logger
from gameq.protocols.base import TransportProtocol
from gameq.query.core import QueryCore

logger = get_logger("query")


class NativeSocket(QueryCore):
    """Query socket backed by socket.socket"""

    def create(self) -> None:
        family = socket.AF_INET6 if is_ipv6(self.ip) else socket.AF_INET
        if self.transport == TransportProtocol.TCP:
            kind = socket.SOCK_STREAM
        else:
            kind = socket.SOCK_DGRAM

        sock = socket.socket(family, kind)
        try:
            sock.settimeout(self.timeout)
            sock.connect((self.ip, self.port))
            sock.setblocking(self.blocking)
        except OSError as e:
            sock.close()
            raise SocketError(
                f"Unable to create socket to {self.ip}:{self.port}",
                {"transport": self.transport.value, "error": str(e)},
            ) from e

        self.socket = sock
        logger.debug(
            "query_socket_created",
            transport=self.transport.value,
            ip=self.ip,
            port=self.port,
        )

    def write(self, data: bytes) -> int:
        sock = self.get_socket()
        try:
            return sock.send(data)
        except OSError as e:
            raise SocketError(
                f"Failed to write to {self.ip}:{self.port}",
                {"error": str(e), "data_size": len(data)},
            ) from e

    def read(self, length: Optional[int] = None) -> bytes:
        sock = self.get_socket()
        try:
            return sock.recv(length or settings.socket_read_bytes)
        except BlockingIOError:
            # Nothing buffered on a non-blocking socket
            return b""
        except OSError as e:
            raise SocketError(
                f"Failed to read from {self.ip}:{self.port}",
                {"error": str(e)},
            ) from e

    def close(self) -> None:
        if self.socket is None:
            return
        sock, self.socket = self.socket, None
        sock.close()
        logger.debug("query_socket_closed", ip=self.ip, port=self.port)

    def fileno(self) -> int:
        """File descriptor, for select/selectors based event loops"""
        return self.get_socket().fileno()
