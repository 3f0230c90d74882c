from typing import List, Tuple

import pytest

from wavelogstoat.core.config import Settings
from wavelogstoat.core.exceptions import TransportError
from wavelogstoat.models.contact import ContactRecord


API_URL = "https://wavelog.example.com/api/qso"


class RecordingTransport:
    """Stand-in for WavelogClient that remembers what it was asked to send."""

    def __init__(self, fail_calls: Tuple[str, ...] = ()):
        self.sent: List[Tuple[str, ContactRecord]] = []
        self.fail_calls = fail_calls

    async def send_qso(self, adif: str, record: ContactRecord) -> None:
        if record.call in self.fail_calls:
            raise TransportError(f"QSO not added (status: failed): duplicate {record.call}")
        self.sent.append((adif, record))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        wavelog={
            "url": "https://wavelog.example.com/",
            "api_key": "secret-key-1234",
            "station_profile_id": "7",
            "timeout": 2000,
        },
        server={"port": 0, "verbose": True},
    )


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()
