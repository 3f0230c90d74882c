"""Adapter exports."""

from .udp import ContactDatagramProtocol, UDPListener
from .wavelog import WavelogClient

__all__ = [
    "ContactDatagramProtocol",
    "UDPListener",
    "WavelogClient",
]
