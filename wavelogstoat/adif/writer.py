"""ADIF serializer for contact records sent to Wavelog."""

from __future__ import annotations

from typing import List

from wavelogstoat.models.contact import ContactRecord


ADIF_HEADER = "<ADIF_VER:5>5.0<EOH>\n"
END_OF_RECORD = "<EOR>\n"

# Output order of the record fields; names are the ADIF tags.
FIELD_ORDER = (
    "CALL",
    "QSO_DATE",
    "TIME_ON",
    "QSO_DATE_OFF",
    "TIME_OFF",
    "MODE",
    "RST_RCVD",
    "RST_SENT",
    "FREQ",
    "FREQ_RX",
    "BAND",
    "TX_PWR",
    "OPERATOR",
    "MY_CALL",
    "STATION_CALLSIGN",
    "GRIDSQUARE",
    "COMMENT",
    "STX",
    "SRX",
    "STX_STRING",
    "SRX_STRING",
    "RTX",
    "CONTEST_ID",
    "PREFIX",
    "MY_GRIDSQUARE",
    "NAME",
    "QTH",
    "STATE",
    "COUNTRY",
    "CQZ",
    "ITUZ",
    "CONT",
    "IOTA",
    "DXCC",
    "PROP_MODE",
    "SAT_NAME",
    "SAT_MODE",
    "SUBMODE",
    "QSLMSG",
    "NOTES",
    "EMAIL",
    "DARC_DOK",
    "SOTA_REF",
    "WWFF_REF",
    "POTA_REF",
    "CNTY",
    "REGION",
    "LAT",
    "LON",
    "ANT_AZ",
    "ANT_EL",
    "ANT_PATH",
    "A_INDEX",
    "K_INDEX",
    "SFI",
    "RX_PWR",
)


def format_field(name: str, value: str) -> str:
    """Render one ``<NAME:n>value `` tag; ``n`` counts UTF-8 bytes."""
    return f"<{name}:{len(value.encode('utf-8'))}>{value} "


def generate_adif(record: ContactRecord) -> str:
    """Serialize ``record`` as a single-record ADIF document.

    Empty fields are left out entirely.
    """
    parts: List[str] = [ADIF_HEADER]
    for name in FIELD_ORDER:
        value = getattr(record, name.lower())
        if value:
            parts.append(format_field(name, value))
    parts.append(END_OF_RECORD)
    return "".join(parts)
