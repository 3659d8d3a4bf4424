"""
Exception hierarchy for gameq

All errors raised by server construction, protocol dispatch and socket
handling inherit from GameQError so callers can catch them with a single
except clause.
"""
from typing import Optional


class GameQError(Exception):
    """
    Base exception for all gameq errors.

    Carries a human readable message plus an optional ``details`` mapping
    with the offending values (host, protocol name, option key, ...).
    """
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# Server construction errors

class ValidationError(GameQError):
    """
    Server info failed validation.

    Raised when a required descriptor key (type, host) is missing or empty,
    an option value has the wrong type, or a protocol is missing a required
    option.
    """
    pass


class AddressError(GameQError):
    """
    Host specification could not be turned into an IP address.

    Covers malformed host:port strings, bad ports, invalid IPv6 literals and
    hostnames that do not resolve.
    """
    pass


# Protocol dispatch errors

class ProtocolError(GameQError):
    """
    Protocol registry failures.

    Duplicate registrations, plugin import failures and handlers that fail
    startup validation.
    """
    pass


class UnknownProtocolError(ProtocolError):
    """No protocol handler is registered under the requested type."""
    def __init__(self, type_name: str):
        super().__init__(
            f"Unknown protocol type '{type_name}'",
            {"type": type_name},
        )
        self.type_name = type_name


# Socket errors

class SocketError(GameQError):
    """
    Query socket failures.

    Raised when a socket cannot be created, written to or read from, and when
    a handle is pooled twice.
    """
    pass
