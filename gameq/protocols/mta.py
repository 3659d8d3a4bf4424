"""Multi Theft Auto (ASE query)"""
from gameq.protocols.base import Protocol, TransportProtocol
from gameq.protocols.registry import register_protocol


@register_protocol("mta")
class Mta(Protocol):
    name = "mta"
    name_long = "Multi Theft Auto"
    transport = TransportProtocol.UDP
    # ASE listens 123 ports above the game port
    port_diff = 123
    join_link = "mtasa://{0}:{1}/"
