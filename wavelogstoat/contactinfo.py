"""Parser for XML ``contactinfo`` broadcasts.

Loggers that speak the N1MM+ style protocol send one contact per datagram::

    <?xml version="1.0" encoding="utf-8"?>
    <contactinfo>
        <timestamp>2024-01-01T12:00:00</timestamp>
        <call>K1ABC</call>
        <mode>USB</mode>
        <txfreq>1407400</txfreq>
        <rxfreq>1407400</rxfreq>
        ...
    </contactinfo>

Frequencies are integers in units of 10 Hz, so dividing by 100000 gives MHz.
"""

from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Optional

from wavelogstoat.bandplan import DECIMAL_RE
from wavelogstoat.core.exceptions import ParseError
from wavelogstoat.core.logging import log_info
from wavelogstoat.models.contact import ContactRecord


ROOT_TAG = "contactinfo"
TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}$")
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
FREQ_DIVISOR = 100000

# Modes rewritten for the logbook; only applied to XML input.
MODE_MAP = {"USB": "SSB", "LSB": "SSB"}


def _get_text(root: ET.Element, tag: str) -> str:
    elem: Optional[ET.Element] = root.find(tag)
    if elem is None or elem.text is None:
        return ""
    return elem.text


def _parse_timestamp(value: str) -> datetime:
    if not TIMESTAMP_RE.match(value):
        raise ParseError(f"timestamp parsing failed: {value!r}")
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise ParseError(f"timestamp parsing failed: {e}") from e


def _to_mhz(value: str, label: str) -> str:
    if not DECIMAL_RE.fullmatch(value):
        raise ParseError(f"{label} frequency parsing failed: {value!r}")
    hz = float(value)
    if not math.isfinite(hz):
        raise ParseError(f"{label} frequency parsing failed: {value!r}")
    return f"{hz / FREQ_DIVISOR:.6f}"


def parse_xml_message(message: str, *, verbose: bool = False) -> ContactRecord:
    """Parse a ``contactinfo`` document into a ``ContactRecord``.

    Raises ``ParseError`` for malformed XML, a different root element, a
    timestamp not in ``YYYY-MM-DDTHH:MM:SS`` form, or a non-numeric
    ``txfreq``/``rxfreq``.
    """
    try:
        root = ET.fromstring(message)
    except ET.ParseError as e:
        raise ParseError(f"XML parsing failed: {e}") from e

    if root.tag != ROOT_TAG:
        raise ParseError(f"XML parsing failed: expected <{ROOT_TAG}>, got <{root.tag}>")

    timestamp = _parse_timestamp(_get_text(root, "timestamp"))
    mode = _get_text(root, "mode")
    mode = MODE_MAP.get(mode, mode)
    freq = _to_mhz(_get_text(root, "txfreq"), "TX")
    freq_rx = _to_mhz(_get_text(root, "rxfreq"), "RX")

    qso_date = timestamp.strftime("%Y%m%d")
    qso_time = timestamp.strftime("%H%M%S")
    my_call = _get_text(root, "mycall")

    record = ContactRecord(
        call=_get_text(root, "call"),
        mode=mode,
        qso_date_off=qso_date,
        qso_date=qso_date,
        time_off=qso_time,
        time_on=qso_time,
        rst_rcvd=_get_text(root, "rcv"),
        rst_sent=_get_text(root, "snt"),
        freq=freq,
        freq_rx=freq_rx,
        operator=_get_text(root, "operator"),
        comment=_get_text(root, "comment"),
        tx_pwr=_get_text(root, "power"),
        stx=_get_text(root, "sntnr"),
        rtx=_get_text(root, "rcvnr"),
        my_call=my_call,
        gridsquare=_get_text(root, "gridsquare"),
        station_callsign=my_call,
    )

    if not record.call:
        raise ParseError("missing required call element in XML")

    if verbose:
        log_info("xml_parsed", fields=record.populated())

    return record
