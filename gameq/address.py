"""
Host specification parsing and resolution

Turns the ``host`` value of a server descriptor into a validated IP literal
and an optional client port. Accepted forms:

    1.2.3.4            IPv4, no port
    1.2.3.4:27015      IPv4 with port
    example.com:27015  hostname (resolved to IPv4) with port
    ::1 / [::1]        IPv6, no port
    [::1]:27015        IPv6 with port (brackets required when a port is given)

IPv6 addresses are returned without their enclosing brackets.
"""
import asyncio
import ipaddress
import socket
from typing import Callable, Optional, Tuple

from gameq.config import settings
from gameq.exceptions import AddressError
from gameq.logging import get_logger

logger = get_logger("address")

HostResolver = Callable[[str], str]

MAX_PORT = 65535


def is_ipv4(value: str) -> bool:
    """True when ``value`` is a dotted-quad IPv4 literal"""
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def is_ipv6(value: str) -> bool:
    """True when ``value`` is an IPv6 literal (no brackets)"""
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


def parse_port(value: str, host_spec: str) -> int:
    """Decimal port in 0..65535"""
    value = value.strip()
    if not (value.isascii() and value.isdigit()):
        raise AddressError(
            f"Invalid port '{value}' in host '{host_spec}'",
            {"host": host_spec, "port": value},
        )
    port = int(value)
    if port > MAX_PORT:
        raise AddressError(
            f"Port {port} out of range in host '{host_spec}'",
            {"host": host_spec, "port": port},
        )
    return port


def split_host(host_spec: str) -> Tuple[str, Optional[int], bool]:
    """
    Split a host specification into address and port without validating it.

    Returns:
        (address, port, is_ipv6_candidate). IPv6 candidates have their
        brackets stripped.

    Raises:
        AddressError: If the port part is not a valid port number
    """
    host_spec = host_spec.strip()

    # More than one colon can only be IPv6
    if host_spec.count(":") > 1:
        if "]:" in host_spec:
            parts = host_spec.split(":")
            port = parse_port(parts.pop(), host_spec)
            address = ":".join(parts)
        else:
            address, port = host_spec, None
        return address.strip("[]"), port, True

    if ":" in host_spec:
        address, raw_port = host_spec.split(":")
        return address, parse_port(raw_port, host_spec), False

    return host_spec, None, False


class AddressResolver:
    """
    Resolves host specifications to ``(ip, port)`` pairs.

    Hostname lookup is delegated to ``resolver`` (``socket.gethostbyname`` by
    default). A lookup fails when the resolver raises ``OSError`` or when it
    hands back the input unchanged, which is how echoing resolvers report
    "not found". Lookups block; use ``resolve_async`` from event loop code.
    """

    def __init__(
        self,
        resolver: Optional[HostResolver] = None,
        resolve_hostnames: Optional[bool] = None,
    ):
        self._resolver = resolver or socket.gethostbyname
        self.resolve_hostnames = (
            settings.resolve_hostnames if resolve_hostnames is None else resolve_hostnames
        )

    def resolve(self, host_spec: str) -> Tuple[str, Optional[int]]:
        """
        Parse and validate a host specification.

        Args:
            host_spec: host, host:port, IPv6 or [IPv6]:port

        Returns:
            Tuple of (ip, port) where port is None when none was given

        Raises:
            AddressError: On malformed input, invalid IPv6 or failed resolution
        """
        address, port, ipv6 = self._split(host_spec)
        if ipv6 or is_ipv4(address):
            return address, port
        return self._lookup(address), port

    async def resolve_async(self, host_spec: str) -> Tuple[str, Optional[int]]:
        """Same as ``resolve`` with the hostname lookup run in the loop's executor"""
        address, port, ipv6 = self._split(host_spec)
        if ipv6 or is_ipv4(address):
            return address, port
        loop = asyncio.get_running_loop()
        ip = await loop.run_in_executor(None, self._lookup, address)
        return ip, port

    def _split(self, host_spec: str) -> Tuple[str, Optional[int], bool]:
        if not host_spec or not host_spec.strip():
            raise AddressError("Empty host specification", {"host": host_spec})

        address, port, ipv6 = split_host(host_spec)

        # Never fall back to IPv4 handling for IPv6 looking input
        if ipv6 and not is_ipv6(address):
            raise AddressError(
                f"The IPv6 address '{address}' is invalid.",
                {"host": host_spec},
            )
        if not address:
            raise AddressError(f"Missing address in host '{host_spec}'", {"host": host_spec})
        return address, port, ipv6

    def _lookup(self, hostname: str) -> str:
        if not self.resolve_hostnames:
            raise AddressError(
                f"'{hostname}' is not an IP address and hostname resolution is disabled",
                {"host": hostname},
            )

        try:
            ip = self._resolver(hostname)
        except OSError as e:
            logger.debug("host_resolution_failed", host=hostname, error=str(e))
            raise AddressError(
                f"Unable to resolve the host '{hostname}' to an IP address.",
                {"host": hostname, "error": str(e)},
            ) from e

        if ip == hostname or not is_ipv4(ip):
            raise AddressError(
                f"Unable to resolve the host '{hostname}' to an IP address.",
                {"host": hostname, "resolved": ip},
            )

        logger.debug("host_resolved", host=hostname, ip=ip)
        return ip


def resolve_host(host_spec: str) -> Tuple[str, Optional[int]]:
    """Resolve with a default AddressResolver"""
    return AddressResolver().resolve(host_spec)
