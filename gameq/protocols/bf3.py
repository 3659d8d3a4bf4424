"""Battlefield 3 (Frostbite RCON-style query over TCP)"""
from gameq.protocols.base import Protocol, TransportProtocol
from gameq.protocols.registry import register_protocol


@register_protocol("bf3")
class Bf3(Protocol):
    name = "bf3"
    name_long = "Battlefield 3"
    transport = TransportProtocol.TCP
    port_diff = 22000
