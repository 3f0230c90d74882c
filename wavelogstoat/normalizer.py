"""Normalization applied to every record before serialization."""

from __future__ import annotations

import math
import re

from wavelogstoat.bandplan import calculate_band
from wavelogstoat.core.logging import log_info
from wavelogstoat.models.contact import ContactRecord


_POWER_RE = re.compile(r"^(\d+(?:\.\d+)?)", re.ASCII)


def normalize_power(power_str: str) -> str:
    """Render a free-form power string as watts.

    Accepts forms such as ``"100"``, ``"100W"``, ``"1.5kW"`` or ``"500mW"``.
    Strings without a leading number are returned unchanged.
    """
    if not power_str:
        return power_str

    cleaned = power_str.strip().lower()
    match = _POWER_RE.match(cleaned)
    if not match:
        return power_str

    value = float(match.group(1))
    if "kw" in cleaned:
        value *= 1000
    elif "mw" in cleaned:
        value *= 0.001
    if not math.isfinite(value):
        return power_str

    if value.is_integer():
        return f"{value:.0f}"
    return f"{value:.3f}"


def normalize_contact(record: ContactRecord, *, verbose: bool = False) -> ContactRecord:
    """Normalize power and derive the band, modifying ``record`` in place."""
    original_power = record.tx_pwr
    record.tx_pwr = normalize_power(record.tx_pwr)

    if record.freq:
        record.band = calculate_band(record.freq)

    if verbose:
        log_info(
            "contact_normalized",
            call=record.call,
            power_in=original_power,
            power_out=record.tx_pwr,
            freq=record.freq,
            band=record.band,
        )
    return record
