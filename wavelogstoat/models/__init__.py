"""Model exports."""

from .bandplan import BandEdge
from .contact import ContactRecord
from .wavelog import WavelogPayload, WavelogResponse

__all__ = [
    "BandEdge",
    "ContactRecord",
    "WavelogPayload",
    "WavelogResponse",
]
