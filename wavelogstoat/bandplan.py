"""Frequency to amateur band classification.

Frequencies arrive as MHz strings (the ADIF ``FREQ`` field). The band table
is static and scanned in order; the first entry whose inclusive range holds
the frequency wins.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional

from wavelogstoat.models.bandplan import BandEdge


# Plain ASCII decimal, optionally signed, with an optional exponent.
DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


BAND_TABLE = (
    BandEdge(name="160M", lower_mhz=1.800, upper_mhz=2.000),
    BandEdge(name="80M", lower_mhz=3.500, upper_mhz=4.000),
    BandEdge(name="60M", lower_mhz=5.330, upper_mhz=5.400),
    BandEdge(name="40M", lower_mhz=7.000, upper_mhz=7.300),
    BandEdge(name="30M", lower_mhz=10.100, upper_mhz=10.150),
    BandEdge(name="20M", lower_mhz=14.000, upper_mhz=14.350),
    BandEdge(name="17M", lower_mhz=18.068, upper_mhz=18.168),
    BandEdge(name="15M", lower_mhz=21.000, upper_mhz=21.450),
    BandEdge(name="12M", lower_mhz=24.890, upper_mhz=24.990),
    BandEdge(name="10M", lower_mhz=28.000, upper_mhz=29.700),
    BandEdge(name="6M", lower_mhz=50.000, upper_mhz=54.000),
    BandEdge(name="2M", lower_mhz=144.000, upper_mhz=148.000),
    BandEdge(name="1.25M", lower_mhz=222.000, upper_mhz=225.000),
    BandEdge(name="70CM", lower_mhz=420.000, upper_mhz=450.000),
    BandEdge(name="33CM", lower_mhz=902.000, upper_mhz=928.000),
    BandEdge(name="23CM", lower_mhz=1240.000, upper_mhz=1300.000),
)


def parse_mhz(freq_str: str) -> Optional[float]:
    """Parse a MHz string, returning ``None`` when it is not a finite decimal.

    Padding, digit separators and ``nan``/``inf`` are not accepted.
    """
    if not isinstance(freq_str, str) or not DECIMAL_RE.fullmatch(freq_str):
        return None
    value = float(freq_str)
    if not math.isfinite(value):
        return None
    return value


def find_band(freq_str: str, table: Iterable[BandEdge] = BAND_TABLE) -> Optional[BandEdge]:
    """Return the first table entry containing the frequency, if any."""
    freq = parse_mhz(freq_str)
    if freq is None:
        return None

    for band in table:
        if band.contains(freq):
            return band
    return None


def calculate_band(freq_str: str) -> str:
    """Band name for a MHz frequency string, or ``""`` when out of band.

    Unparseable input is not an error and also yields ``""``.
    """
    band = find_band(freq_str)
    return band.name if band else ""
