"""Record pipeline: detect, split, parse, normalize, serialize, submit.

A payload is either an XML ``contactinfo`` document (always one record) or
ADIF text holding one or more records separated by ``<EOR>``. Each record is
handled on its own; a bad record is logged and skipped without affecting the
rest of the batch.
"""

from __future__ import annotations

import enum
from typing import Callable, Dict, List

from wavelogstoat.adif.reader import parse_adif_message
from wavelogstoat.adif.writer import generate_adif
from wavelogstoat.contactinfo import parse_xml_message
from wavelogstoat.core.exceptions import ParseError, TransportError
from wavelogstoat.core.logging import log_error, log_info, log_warning
from wavelogstoat.models.contact import ContactRecord
from wavelogstoat.normalizer import normalize_contact


EOR = "<EOR>"


class MessageFormat(str, enum.Enum):
    XML = "xml"
    ADIF = "adif"


PARSERS: Dict[MessageFormat, Callable[..., ContactRecord]] = {
    MessageFormat.XML: parse_xml_message,
    MessageFormat.ADIF: parse_adif_message,
}


def detect_format(payload: str) -> MessageFormat:
    """Classify a payload; any occurrence of ``xml`` means XML."""
    if "xml" in payload:
        return MessageFormat.XML
    return MessageFormat.ADIF


def split_records(payload: str) -> List[str]:
    """Split an ADIF payload into single records.

    Without an ``<EOR>`` marker the payload is returned whole. Otherwise
    segments are trimmed, empty ones dropped, and the marker is put back on
    every segment but the last.
    """
    if EOR not in payload:
        return [payload]

    segments = [s.strip() for s in payload.split(EOR)]
    segments = [s for s in segments if s]
    return [s + EOR for s in segments[:-1]] + segments[-1:]


class RecordPipeline:
    """Drive payloads from the listener through to the transport.

    ``transport`` is any object with an ``async send_qso(adif, record)``
    method that raises ``TransportError`` on failure.
    """

    def __init__(self, transport, *, verbose: bool = False):
        self.transport = transport
        self.verbose = verbose

    async def process_message(self, message: str) -> int:
        """Process a raw payload and return the number of records delivered."""
        message_format = detect_format(message)
        if message_format is MessageFormat.XML:
            return int(await self.process_single(message, MessageFormat.XML))

        if EOR not in message:
            return int(await self.process_single(message, MessageFormat.ADIF))

        records = split_records(message)
        processed = 0
        for index, record in enumerate(records, start=1):
            if self.verbose:
                log_info("batch_record", index=index, total=len(records))
            if await self.process_single(record, MessageFormat.ADIF):
                processed += 1

        if processed > 1:
            log_info("batch_processed", processed=processed, total=len(records))
        return processed

    async def process_single(self, message: str, message_format: MessageFormat) -> bool:
        """Run one record through the pipeline; ``True`` when delivered."""
        try:
            record = PARSERS[message_format](message, verbose=self.verbose)
        except ParseError as e:
            log_warning("parse_failed", format=message_format.value, error=str(e))
            return False

        normalize_contact(record, verbose=self.verbose)
        adif = generate_adif(record)

        try:
            await self.transport.send_qso(adif, record)
        except TransportError as e:
            log_error("send_failed", call=record.call, error=str(e))
            return False
        return True
