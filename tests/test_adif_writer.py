import re

from wavelogstoat.adif.reader import parse_adif_message
from wavelogstoat.adif.writer import ADIF_HEADER, FIELD_ORDER, format_field, generate_adif
from wavelogstoat.models.contact import ContactRecord


FIELD_TAG_RE = re.compile(r"<([A-Z_]+):(\d+)>")


def _field_tags(adif: str):
    body = adif[len(ADIF_HEADER):]
    return FIELD_TAG_RE.findall(body)


def test_call_and_mode_only() -> None:
    adif = generate_adif(ContactRecord(call="K1ABC", mode="FT8"))
    assert adif == "<ADIF_VER:5>5.0<EOH>\n<CALL:5>K1ABC <MODE:3>FT8 <EOR>\n"
    assert len(_field_tags(adif)) == 2


def test_empty_fields_are_omitted() -> None:
    adif = generate_adif(ContactRecord(call="K1ABC", comment="", band=""))
    assert "<COMMENT" not in adif
    assert "<BAND" not in adif


def test_fixed_field_order() -> None:
    record = ContactRecord(
        call="K1ABC",
        rx_pwr="5",
        band="20M",
        freq="14.074000",
        time_on="120000",
        qso_date="20240101",
        mode="FT8",
        tx_pwr="100",
    )
    names = [name for name, _ in _field_tags(generate_adif(record))]
    assert names == ["CALL", "QSO_DATE", "TIME_ON", "MODE", "FREQ", "BAND", "TX_PWR", "RX_PWR"]


def test_length_is_byte_length() -> None:
    assert format_field("NAME", "Zoë") == "<NAME:4>Zoë "
    assert format_field("CALL", "K1ABC") == "<CALL:5>K1ABC "


def test_every_record_field_is_written() -> None:
    written = {name.lower() for name in FIELD_ORDER}
    assert written == set(ContactRecord.model_fields)


def test_ends_with_eor_newline() -> None:
    adif = generate_adif(ContactRecord(call="K1ABC"))
    assert adif.startswith("<ADIF_VER:5>5.0<EOH>\n")
    assert adif.endswith("<EOR>\n")


def test_round_trip_preserves_values() -> None:
    source = (
        "<CALL:5>K1ABC<QSO_DATE:8>20240101<TIME_ON:6>120000<MODE:3>FT8"
        "<RST_RCVD:3>-10<RST_SENT:3>-12<FREQ:9>14.074123<FREQ_RX:9>14.074500"
        "<TX_PWR:2>50<OPERATOR:4>N5ZY<GRIDSQUARE:4>FN31<COMMENT:11>tnx fer QSO"
        "<NAME:4>Zoë<SOTA_REF:9>W1/HA-001<LAT:11>N042 21.000<EOR>"
    )
    first = parse_adif_message(source)
    second = parse_adif_message(generate_adif(first))
    assert second.populated() == first.populated()
    assert second.comment == "tnx fer QSO"
    assert second.name == "Zoë"
