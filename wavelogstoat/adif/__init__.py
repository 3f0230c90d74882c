"""ADIF reading and writing."""

from .reader import parse_adif_message
from .writer import generate_adif

__all__ = ["parse_adif_message", "generate_adif"]
