"""
Server entity

A Server is one queryable game server: a validated address, the protocol
handler bound to it, its client and query ports, free-form options and the
pool of query sockets the event loop reuses between rounds.

    server = Server({"type": "source", "host": "1.2.3.4:27015"})
    server.port_query        # 27015
    server.get_join_link()   # "steam://connect/1.2.3.4:27015/"

Identity, address and protocol are fixed at construction. Options and the
socket pool are the only mutable state; call socket_cleanse() before
dropping a server so no pooled socket is leaked.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple, Union

import pydantic

from gameq.address import MAX_PORT, AddressResolver
from gameq.exceptions import ValidationError
from gameq.logging import get_logger
from gameq.models import ServerInfo, ServerOptions
from gameq.pool import SocketHandle, SocketPool
from gameq.protocols import Protocol, ProtocolRegistry, registry as default_registry
from gameq.query.native import NativeSocket

logger = get_logger("server")

ServerInfoLike = Union[ServerInfo, Mapping[str, Any]]


class Server:
    """A single game server endpoint"""

    # Server info keys
    SERVER_TYPE = "type"
    SERVER_HOST = "host"
    SERVER_ID = "id"
    SERVER_OPTIONS = "options"

    # Reserved option keys
    SERVER_OPTIONS_QUERY_PORT = "query_port"
    SERVER_OPTIONS_MASTER_SERVER_PORT = "master_server_port"

    def __init__(
        self,
        server_info: ServerInfoLike,
        registry: Optional[ProtocolRegistry] = None,
        resolver: Optional[AddressResolver] = None,
    ):
        """
        Build a server from its descriptor.

        Args:
            server_info: Mapping (or ServerInfo) with type, host and optional id/options
            registry: Protocol registry, the global one by default
            resolver: Address resolver, a default AddressResolver otherwise

        Raises:
            ValidationError: Missing type/host, bad option values, or no way to
                derive a valid query port
            AddressError: The host could not be parsed or resolved
            UnknownProtocolError: No handler registered for the type
        """
        info, server_type, host, options = self._prepare(server_info)
        if resolver is None:
            resolver = AddressResolver()
        self._bind(info, server_type, host, options, resolver.resolve(host), registry)

    @classmethod
    async def from_info_async(
        cls,
        server_info: ServerInfoLike,
        registry: Optional[ProtocolRegistry] = None,
        resolver: Optional[AddressResolver] = None,
    ) -> "Server":
        """Build a server without blocking the running event loop on DNS"""
        info, server_type, host, options = cls._prepare(server_info)
        if resolver is None:
            resolver = AddressResolver()
        address = await resolver.resolve_async(host)

        server = cls.__new__(cls)
        server._bind(info, server_type, host, options, address, registry)
        return server

    @classmethod
    def _prepare(cls, server_info: ServerInfoLike) -> Tuple[Dict[str, Any], str, str, ServerOptions]:
        info = cls._normalize_info(server_info)
        server_type = cls._require(info, cls.SERVER_TYPE)
        host = cls._require(info, cls.SERVER_HOST)
        return info, server_type, host, cls._build_options(info.get(cls.SERVER_OPTIONS))

    def _bind(
        self,
        info: Mapping[str, Any],
        server_type: str,
        host: str,
        options: ServerOptions,
        address: Tuple[str, Optional[int]],
        registry: Optional[ProtocolRegistry],
    ) -> None:
        self._options = options
        self._ip, self._port_client = address

        if registry is None:
            registry = default_registry
        self._protocol = registry.create(server_type, self._options.to_dict())

        query_port = self._options.query_port
        if query_port is not None:
            self._port_query = int(query_port)
        elif self._port_client is not None:
            self._port_query = self._port_client + self._protocol.port_offset()
        else:
            raise ValidationError(
                f"Host '{host}' has no port and option '{self.SERVER_OPTIONS_QUERY_PORT}' is not set",
                {"host": host, "type": server_type},
            )

        if not 0 <= self._port_query <= MAX_PORT:
            raise ValidationError(
                f"Query port {self._port_query} for host '{host}' is out of range",
                {"host": host, "type": server_type, "port_query": self._port_query},
            )

        server_id = info.get(self.SERVER_ID)
        if not server_id:
            if self._port_client is None:
                server_id = self._ip
            else:
                server_id = f"{self._ip}:{self._port_client}"
        self._id = str(server_id)

        self._sockets: SocketPool = SocketPool(owner=self._id)

        logger.debug(
            "server_created",
            server_id=self._id,
            protocol=self._protocol.name,
            ip=self._ip,
            port_client=self._port_client,
            port_query=self._port_query,
        )

    @staticmethod
    def _normalize_info(server_info: ServerInfoLike) -> Dict[str, Any]:
        if isinstance(server_info, ServerInfo):
            return server_info.model_dump()
        if not isinstance(server_info, Mapping):
            raise ValidationError(
                "Server info must be a mapping",
                {"type": type(server_info).__name__},
            )
        return dict(server_info)

    @staticmethod
    def _require(info: Mapping[str, Any], key: str) -> str:
        value = info.get(key)
        if value is None or not str(value).strip():
            raise ValidationError(f"Missing server info key '{key}'", {"key": key})
        return str(value)

    @staticmethod
    def _build_options(options: Any) -> ServerOptions:
        if not isinstance(options, Mapping):
            options = {}
        try:
            return ServerOptions.model_validate(dict(options))
        except pydantic.ValidationError as e:
            raise ValidationError(
                f"Invalid server options: {e.errors()[0]['msg']}",
                {"errors": e.errors(include_url=False)},
            ) from e

    # Options

    def set_option(self, key: str, value: Any) -> "Server":
        """Set an option, returns self so calls can be chained"""
        self._options.set(key, value)
        return self

    def get_option(self, key: str) -> Any:
        """Option value, or None when it is not set"""
        return self._options.get(key)

    @property
    def options(self) -> Dict[str, Any]:
        return self._options.to_dict()

    # Accessors

    @property
    def id(self) -> str:
        return self._id

    @property
    def ip(self) -> str:
        return self._ip

    @property
    def port_client(self) -> Optional[int]:
        return self._port_client

    @property
    def port_query(self) -> int:
        return self._port_query

    @property
    def protocol(self) -> Protocol:
        return self._protocol

    def get_join_link(self) -> str:
        """
        Join link for this server, "" when the protocol has none.

        Raises:
            ValueError: If the protocol has a join link but the host carried no client port
        """
        template = self._protocol.join_link_template()
        if not template:
            return ""
        if self._port_client is None:
            raise ValueError(f"Server {self._id} has no client port for a join link")
        return template.format(self._ip, self._port_client)

    # Socket holding

    def socket_add(self, socket: SocketHandle) -> None:
        """Hand a socket back to this server for reuse"""
        self._sockets.add(socket)

    def socket_get(self) -> Optional[SocketHandle]:
        """Most recently returned socket, None when there is nothing to reuse"""
        return self._sockets.get()

    def socket_cleanse(self) -> None:
        """Close every pooled socket and empty the pool"""
        self._sockets.cleanse()

    def socket_for(self, timeout: Optional[float] = None) -> SocketHandle:
        """
        Socket to query this server with: a pooled one if available,
        otherwise a new NativeSocket to the query port.
        """
        socket = self.socket_get()
        if socket is None:
            socket = NativeSocket(
                self._protocol.transport,
                self._ip,
                self._port_query,
                timeout=timeout,
            )
        return socket

    @property
    def socket_count(self) -> int:
        return len(self._sockets)

    def __repr__(self) -> str:
        return f"<Server {self._id} {self._protocol.name} query={self._port_query}>"
