import json
import logging

import pytest

from wavelogstoat.contactinfo import parse_xml_message
from wavelogstoat.core.exceptions import ParseError


def contact_xml(**overrides: str) -> str:
    fields = {
        "timestamp": "2024-03-09T14:05:30",
        "call": "K1ABC",
        "mode": "USB",
        "txfreq": "1407400",
        "rxfreq": "1407450",
        "rcv": "59",
        "snt": "57",
        "power": "100",
        "operator": "N5ZY",
        "comment": "portable",
        "sntnr": "12",
        "rcvnr": "34",
        "mycall": "N5ZY",
        "gridsquare": "FN31",
    }
    fields.update(overrides)
    body = "".join(f"<{k}>{v}</{k}>" for k, v in fields.items() if v is not None)
    return f'<?xml version="1.0" encoding="utf-8"?>\n<contactinfo>{body}</contactinfo>'


def test_parse_full_contact() -> None:
    record = parse_xml_message(contact_xml())
    assert record.call == "K1ABC"
    assert record.rst_rcvd == "59"
    assert record.rst_sent == "57"
    assert record.tx_pwr == "100"
    assert record.operator == "N5ZY"
    assert record.comment == "portable"
    assert record.stx == "12"
    assert record.rtx == "34"
    assert record.gridsquare == "FN31"


def test_timestamp_fills_dates_and_times() -> None:
    record = parse_xml_message(contact_xml())
    assert record.qso_date == "20240309"
    assert record.qso_date_off == "20240309"
    assert record.time_on == "140530"
    assert record.time_off == "140530"


def test_frequencies_are_converted_to_mhz() -> None:
    record = parse_xml_message(contact_xml())
    assert record.freq == "14.074000"
    assert record.freq_rx == "14.074500"


def test_frequency_division_factor() -> None:
    record = parse_xml_message(contact_xml(txfreq="5031300", rxfreq="14417400"))
    assert record.freq == "50.313000"
    assert record.freq_rx == "144.174000"


@pytest.mark.parametrize("mode,expected", [("USB", "SSB"), ("LSB", "SSB"), ("CW", "CW"), ("FT8", "FT8")])
def test_sideband_modes_become_ssb(mode: str, expected: str) -> None:
    assert parse_xml_message(contact_xml(mode=mode)).mode == expected


def test_mycall_fills_station_callsign() -> None:
    record = parse_xml_message(contact_xml(mycall="W1AW"))
    assert record.my_call == "W1AW"
    assert record.station_callsign == "W1AW"


def test_missing_optional_elements_are_empty() -> None:
    record = parse_xml_message(contact_xml(comment=None, power=None, gridsquare=None))
    assert record.comment == ""
    assert record.tx_pwr == ""
    assert record.gridsquare == ""


def test_band_is_left_for_normalization() -> None:
    assert parse_xml_message(contact_xml()).band == ""


def test_malformed_xml_raises() -> None:
    with pytest.raises(ParseError):
        parse_xml_message("<?xml version='1.0'?><contactinfo><call>K1ABC</contactinfo>")


def test_wrong_root_element_raises() -> None:
    with pytest.raises(ParseError):
        parse_xml_message("<?xml version='1.0'?><RadioInfo><call>K1ABC</call></RadioInfo>")


@pytest.mark.parametrize("timestamp", ["2024-03-09 14:05:30", "2024-3-9T14:05:30", "", "2024-13-09T14:05:30"])
def test_bad_timestamp_raises(timestamp: str) -> None:
    with pytest.raises(ParseError):
        parse_xml_message(contact_xml(timestamp=timestamp))


def test_missing_timestamp_raises() -> None:
    with pytest.raises(ParseError):
        parse_xml_message(contact_xml(timestamp=None))


@pytest.mark.parametrize("field", ["txfreq", "rxfreq"])
def test_bad_frequency_raises(field: str) -> None:
    with pytest.raises(ParseError):
        parse_xml_message(contact_xml(**{field: "fourteen"}))


def test_missing_frequency_raises() -> None:
    with pytest.raises(ParseError):
        parse_xml_message(contact_xml(rxfreq=None))


def test_missing_call_raises() -> None:
    with pytest.raises(ParseError):
        parse_xml_message(contact_xml(call=None))


@pytest.mark.parametrize("value", [" 1407400 ", "1_407_400", "nan", "inf", "9" * 400])
def test_loose_frequency_syntax_raises(value: str) -> None:
    with pytest.raises(ParseError):
        parse_xml_message(contact_xml(txfreq=value))


def test_verbose_logs_parsed_fields(caplog) -> None:
    caplog.set_level(logging.INFO, logger="wavelogstoat")
    parse_xml_message(contact_xml(comment=None), verbose=True)

    logged = [json.loads(r.getMessage()) for r in caplog.records if "xml_parsed" in r.getMessage()]
    assert len(logged) == 1
    assert logged[0]["fields"]["call"] == "K1ABC"
    assert "comment" not in logged[0]["fields"]
