"""Quake 3 engine (getstatus query)"""
from gameq.protocols.base import Protocol, TransportProtocol
from gameq.protocols.registry import register_protocol


@register_protocol("quake3")
class Quake3(Protocol):
    name = "quake3"
    name_long = "Quake 3 Server"
    transport = TransportProtocol.UDP
    port_diff = 0
