"""Pydantic models for the Wavelog QSO API.

``WavelogPayload`` is the JSON body posted to ``/api/qso``;
``WavelogResponse`` is the reply Wavelog sends back.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, field_validator


class WavelogPayload(BaseModel):
    """Request body for a QSO submission."""

    key: str
    station_profile_id: str
    type: str = "adif"
    string: str


class WavelogResponse(BaseModel):
    """Reply from Wavelog; ``status`` is ``"created"`` on success."""

    status: str = ""
    messages: List[str] = []

    @field_validator("messages", mode="before")
    @classmethod
    def _null_messages(cls, value):
        # Wavelog may send "messages": null
        return [] if value is None else value

    @property
    def created(self) -> bool:
        return self.status == "created"
