"""
Teamspeak 3 ServerQuery

The host given for a Teamspeak 3 server is the voice port clients connect
to (usually 9987); the virtual server is selected by that port. ServerQuery
listens on an unrelated TCP port (usually 10011), so the ``query_port``
option is required.
"""
from typing import Any, Mapping, Optional

from gameq.exceptions import ValidationError
from gameq.protocols.base import Protocol, TransportProtocol
from gameq.protocols.registry import register_protocol

QUERY_PORT = "query_port"


@register_protocol("teamspeak3", "ts3")
class Teamspeak3(Protocol):
    name = "teamspeak3"
    name_long = "Teamspeak 3"
    transport = TransportProtocol.TCP
    port_diff = 0
    join_link = "ts3server://{0}?port={1}"

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        super().__init__(options)
        if not self.get_option(QUERY_PORT):
            raise ValidationError(
                f"Missing required option '{QUERY_PORT}' for Teamspeak 3",
                {"protocol": self.name, "option": QUERY_PORT},
            )
