"""
Protocol handlers

Importing this package registers the built-in handlers on the global
``registry``:

source, csgo, arma3
    Valve Source engine (A2S). Arma 3 queries on game port + 1.
quake3
    Quake 3 engine getstatus.
gamespy3, minecraft
    GameSpy 3 style queries.
mta
    Multi Theft Auto (ASE, game port + 123).
bf3
    Battlefield 3 over TCP (game port + 22000).
teamspeak3 (ts3)
    Teamspeak 3 ServerQuery, requires the ``query_port`` option.

Third-party handlers can be dropped into ``settings.protocols_dir`` and
imported with ``registry.load_plugins()``.
"""
from gameq.protocols.base import Protocol, TransportProtocol
from gameq.protocols.registry import (
    ProtocolRegistry,
    ValidationIssue,
    canonical_name,
    register_protocol,
    registry,
)
from gameq.protocols import bf3, gamespy, mta, quake3, source, teamspeak3  # noqa: F401  (registration)

__all__ = [
    "Protocol",
    "ProtocolRegistry",
    "TransportProtocol",
    "ValidationIssue",
    "canonical_name",
    "register_protocol",
    "registry",
]
