"""Pydantic model for band table entries."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BandEdge(BaseModel):
    """An amateur band and its inclusive frequency limits."""

    model_config = ConfigDict(frozen=True)

    name: str  # e.g. "20M", "70CM"
    lower_mhz: float
    upper_mhz: float

    def contains(self, freq_mhz: float) -> bool:
        """True when ``freq_mhz`` lies inside the band, edges included."""
        return self.lower_mhz <= freq_mhz <= self.upper_mhz
