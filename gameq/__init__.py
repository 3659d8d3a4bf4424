"""
gameq - server entity core for multi-protocol game server queries
"""
from gameq.address import AddressResolver, resolve_host
from gameq.exceptions import (
    AddressError,
    GameQError,
    ProtocolError,
    SocketError,
    UnknownProtocolError,
    ValidationError,
)
from gameq.models import ServerInfo, ServerOptions
from gameq.pool import SocketHandle, SocketPool
from gameq.protocols import Protocol, ProtocolRegistry, register_protocol, registry
from gameq.server import Server

__version__ = "0.1.0"

__all__ = [
    "AddressError",
    "AddressResolver",
    "GameQError",
    "Protocol",
    "ProtocolError",
    "ProtocolRegistry",
    "Server",
    "ServerInfo",
    "ServerOptions",
    "SocketError",
    "SocketHandle",
    "SocketPool",
    "UnknownProtocolError",
    "ValidationError",
    "register_protocol",
    "registry",
    "resolve_host",
]
