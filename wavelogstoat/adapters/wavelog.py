"""Wavelog adapter for submitting QSOs through the ``/api/qso`` endpoint."""

from __future__ import annotations

from typing import Optional

import httpx
from pydantic import ValidationError

from wavelogstoat.core.config import Settings
from wavelogstoat.core.exceptions import TransportError
from wavelogstoat.core.logging import log_error, log_info, redact
from wavelogstoat.models.contact import ContactRecord
from wavelogstoat.models.wavelog import WavelogPayload, WavelogResponse


USER_AGENT = "WL-Transport-v1.0"
TEST_USER_AGENT = "WL-Transport-v1.0-Test"

# Placeholder record for the connection test. TEST_CALL is not a field Wavelog
# stores, so the test never lands in the logbook.
TEST_ADIF = (
    "<ADIF_VER:5>5.0<EOH>\n"
    "<TEST_CALL:6>K0TEST<QSO_DATE:8>20240101<TIME_ON:6>120000"
    "<MODE:4>FT8<FREQ:6>14.074<BAND:3>20M<EOR>"
)


class WavelogClient:
    """Async client posting ADIF records to a Wavelog instance."""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        """Initialize the client from loaded settings.

        An ``httpx.AsyncClient`` may be supplied; otherwise one is created with
        the configured timeout.
        """
        self.settings = settings
        self.api_url = settings.api_url
        self.verbose = settings.server.verbose
        self._client = client or httpx.AsyncClient(
            timeout=settings.wavelog.timeout / 1000,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "WavelogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _payload(self, adif: str) -> WavelogPayload:
        return WavelogPayload(
            key=self.settings.wavelog.api_key,
            station_profile_id=self.settings.wavelog.station_profile_id,
            type="adif",
            string=adif,
        )

    async def _post(self, payload: WavelogPayload, user_agent: str) -> httpx.Response:
        try:
            return await self._client.post(
                self.api_url,
                json=payload.model_dump(),
                headers={"Content-Type": "application/json", "User-Agent": user_agent},
            )
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP request failed: {e}") from e

    async def send_qso(self, adif: str, record: ContactRecord) -> WavelogResponse:
        """Submit one serialized record.

        Raises ``TransportError`` on a network failure, a non-2xx status, an
        undecodable reply, or a reply whose status is not ``created``.
        """
        payload = self._payload(adif)
        if self.verbose:
            log_info("wavelog_send", call=record.call, freq=record.freq, api_url=self.api_url)
            log_info(
                "wavelog_payload",
                payload={**payload.model_dump(), "key": redact(payload.key)},
            )

        resp = await self._post(payload, USER_AGENT)
        if not resp.is_success:
            raise TransportError(f"API returned status code: {resp.status_code}")

        try:
            result = WavelogResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise TransportError(f"failed to decode response: {e}") from e

        if not result.created:
            raise TransportError(
                f"QSO not added (status: {result.status}): {', '.join(result.messages)}"
            )

        log_info("qso_added", call=record.call, freq=record.freq)
        return result

    async def test_connection(self) -> bool:
        """Post a placeholder record and report whether Wavelog answered 2xx.

        Raises ``TransportError`` when the request fails, the reply cannot be
        decoded, or the status is not 2xx.
        """
        log_info("wavelog_connection_test", api_url=self.api_url)
        resp = await self._post(self._payload(TEST_ADIF), TEST_USER_AGENT)

        try:
            result = WavelogResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise TransportError(f"failed to decode response: {e}") from e

        log_info(
            "wavelog_connection_test_result",
            status_code=resp.status_code,
            status=result.status,
        )
        if not resp.is_success:
            log_error("wavelog_connection_failed", status_code=resp.status_code)
            raise TransportError(
                f"Wavelog connection failed: HTTP {resp.status_code} - {result.status}"
            )
        return True
