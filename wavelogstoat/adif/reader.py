"""ADIF field parser.

Reads the length-prefixed tag grammar ``<NAME:LENGTH>data`` into a
``ContactRecord``. Only tags without a data-type indicator are recognised;
``<EOH>`` and ``<EOR>`` carry no data and are passed over.
"""

from __future__ import annotations

import re
from typing import Dict, Tuple

from wavelogstoat.core.exceptions import ParseError
from wavelogstoat.core.logging import log_info
from wavelogstoat.models.contact import ContactRecord


TAG_RE = re.compile(rb"<([a-zA-Z_]+):(\d+)>")

# Tags that fill more than one record field.
_ALIASES: Dict[str, Tuple[str, ...]] = {
    "QSO_DATE_OFF": ("qso_date_off", "qso_date"),
    "TIME_OFF": ("time_off", "time_on"),
    "MY_CALL": ("my_call", "station_callsign"),
}

# BAND is derived from FREQ and never taken from input.
_NOT_READ = {"band"}


def _build_field_map() -> Dict[str, Tuple[str, ...]]:
    fields: Dict[str, Tuple[str, ...]] = {}
    for attr in ContactRecord.model_fields:
        if attr in _NOT_READ:
            continue
        fields[attr.upper()] = (attr,)
    fields.update(_ALIASES)
    return fields


FIELD_MAP = _build_field_map()


def iter_fields(message: str):
    """Yield ``(name, value)`` for every length-prefixed tag in ``message``.

    Lengths count UTF-8 bytes, the same unit ``generate_adif`` writes, so
    ASCII data reads exactly LENGTH characters. Values are trimmed. A tag
    whose length is not a plain integer does not match the grammar and is
    skipped. A length that runs past the end of the message is cut to what
    remains. Scanning resumes after each value, so a tag-like sequence inside
    a value is not read as a tag.
    """
    data = message.encode("utf-8")
    pos = 0
    while True:
        match = TAG_RE.search(data, pos)
        if not match:
            return

        name, length_str = match.group(1), match.group(2)
        start = match.end()
        if start >= len(data):
            return

        end = min(start + int(length_str), len(data))
        yield name.decode("ascii"), data[start:end].decode("utf-8", errors="replace").strip()
        pos = end


def parse_adif_message(message: str, *, verbose: bool = False) -> ContactRecord:
    """Parse one ADIF record.

    Unknown tags are ignored. Raises ``ParseError`` when no ``CALL`` value is
    present after all tags are read.
    """
    record = ContactRecord()

    for name, value in iter_fields(message):
        for attr in FIELD_MAP.get(name.upper(), ()):
            setattr(record, attr, value)

    if not record.call:
        raise ParseError("missing required CALL field in ADIF")

    if verbose:
        log_info("adif_parsed", fields=record.populated())

    return record
