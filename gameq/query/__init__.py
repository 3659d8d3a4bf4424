"""Query sockets"""
from gameq.query.core import QueryCore
from gameq.query.native import NativeSocket

__all__ = ["NativeSocket", "QueryCore"]
