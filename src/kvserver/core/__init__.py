"""
Low-level networking: the sequential accept loop and the per-client
connection wrapper.
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState

__all__ = ["SocketServer", "Connection", "ConnectionState"]
