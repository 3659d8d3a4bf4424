"""
GameSpy based protocols
"""
from gameq.protocols.base import Protocol, TransportProtocol
from gameq.protocols.registry import register_protocol


@register_protocol("gamespy3")
class Gamespy3(Protocol):
    name = "gamespy3"
    name_long = "GameSpy3 Server"
    transport = TransportProtocol.UDP
    port_diff = 0


@register_protocol("minecraft")
class Minecraft(Gamespy3):
    """
    Minecraft server query.

    The query listener (``enable-query`` in server.properties) shares the
    game port unless ``query.port`` is changed, in which case pass the
    ``query_port`` option.
    """

    name = "minecraft"
    name_long = "Minecraft"
    join_link = "minecraft://{0}:{1}/"
