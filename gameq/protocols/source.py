"""
Valve Source engine protocols

Source (A2S) queries are answered on the game port itself, so the default
port offset is zero. Games built on the engine that move the query port
subclass Source and only change the offset.
"""
from gameq.protocols.base import Protocol, TransportProtocol
from gameq.protocols.registry import register_protocol


@register_protocol("source")
class Source(Protocol):
    """Source Engine (A2S query)"""

    name = "source"
    name_long = "Source Engine"
    transport = TransportProtocol.UDP
    port_diff = 0
    join_link = "steam://connect/{0}:{1}/"


@register_protocol("csgo")
class Csgo(Source):
    name = "csgo"
    name_long = "Counter-Strike: Global Offensive"


@register_protocol("arma3")
class Arma3(Source):
    """Arma 3 answers Steam queries one port above the game port"""

    name = "arma3"
    name_long = "Arma3"
    port_diff = 1
