"""
Protocol handler base class

A protocol handler describes the conventions of one game's query protocol
that the server entity needs: how far the query port sits from the client
port, which transport the query uses, and how to build a join link. Wire
encoding and response parsing live with the query engine, not here.
"""
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class TransportProtocol(str, Enum):
    """Transport used to talk to the query port"""

    UDP = "udp"
    TCP = "tcp"


class Protocol:
    """
    Base protocol handler.

    Subclasses override the class attributes. ``join_link`` is a
    ``str.format`` template taking the ip as ``{0}`` and the client port as
    ``{1}``; an empty string means the game has no join link.
    """

    name: str = "unknown"
    name_long: str = "Unknown"
    transport: TransportProtocol = TransportProtocol.UDP
    port_diff: int = 0
    join_link: str = ""

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        self.options: Dict[str, Any] = dict(options or {})

    def port_offset(self) -> int:
        """Difference between the query port and the client port"""
        return self.port_diff

    def join_link_template(self) -> str:
        return self.join_link

    def get_option(self, key: str, default: Any = None) -> Any:
        value = self.options.get(key)
        return default if value is None else value

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
