"""Pydantic model for a single contact (QSO) record.

Every field is a plain string, even numeric quantities such as frequency or
power, so values keep the exact text the logging program sent. Attribute
names are the lower-cased ADIF tag names; an empty string means "not set".
"""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel


class ContactRecord(BaseModel):
    """One QSO as it travels from a parser to the Wavelog transport."""

    call: str = ""
    mode: str = ""
    submode: str = ""
    qso_date: str = ""  # YYYYMMDD
    qso_date_off: str = ""
    time_on: str = ""  # HHMMSS
    time_off: str = ""
    rst_rcvd: str = ""
    rst_sent: str = ""
    freq: str = ""  # MHz
    freq_rx: str = ""
    band: str = ""  # computed from freq, never read from input
    tx_pwr: str = ""  # watts after normalization
    rx_pwr: str = ""
    operator: str = ""
    my_call: str = ""
    station_callsign: str = ""
    gridsquare: str = ""
    my_gridsquare: str = ""
    comment: str = ""

    # Contest exchange
    stx: str = ""
    srx: str = ""
    stx_string: str = ""
    srx_string: str = ""
    rtx: str = ""
    contest_id: str = ""
    prefix: str = ""

    # Contacted station
    name: str = ""
    qth: str = ""
    state: str = ""
    country: str = ""
    cqz: str = ""
    ituz: str = ""
    cont: str = ""
    iota: str = ""
    dxcc: str = ""
    cnty: str = ""
    region: str = ""
    lat: str = ""
    lon: str = ""
    email: str = ""
    darc_dok: str = ""
    sota_ref: str = ""
    wwff_ref: str = ""
    pota_ref: str = ""

    # Propagation, satellite and antenna
    prop_mode: str = ""
    sat_name: str = ""
    sat_mode: str = ""
    ant_az: str = ""
    ant_el: str = ""
    ant_path: str = ""
    a_index: str = ""
    k_index: str = ""
    sfi: str = ""

    qslmsg: str = ""
    notes: str = ""

    def populated(self) -> Dict[str, str]:
        """Return only the fields that carry a value."""
        return {k: v for k, v in self.model_dump().items() if v}
