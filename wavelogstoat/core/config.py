"""Configuration loading for the transport service.

Settings come from an INI file with ``[wavelog]`` and ``[server]`` sections.
Values missing from the file may be supplied through environment variables
named ``WAVELOGSTOAT_<SECTION>__<KEY>`` (for example
``WAVELOGSTOAT_WAVELOG__API_KEY``).
"""

from __future__ import annotations

import configparser
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from wavelogstoat.core.exceptions import ConfigurationError
from wavelogstoat.core.logging import log_info


DEFAULT_CONFIG_FILE = "config.ini"


class WavelogSettings(BaseModel):
    """Connection details for the Wavelog instance."""

    url: str = ""
    api_key: str = ""
    station_profile_id: str = ""
    timeout: int = Field(default=5000, gt=0)  # milliseconds


class ServerSettings(BaseModel):
    """UDP listener and logging options."""

    host: str = "0.0.0.0"
    port: int = Field(default=2333, ge=0, le=65535)
    verbose: bool = False
    max_workers: int = Field(default=8, ge=1)
    log_file: str = "wavelog-transport.log"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WAVELOGSTOAT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    wavelog: WavelogSettings = Field(default_factory=WavelogSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @property
    def api_url(self) -> str:
        """Full URL of the QSO endpoint."""
        return self.wavelog.url.rstrip("/") + "/api/qso"


DEFAULT_CONFIG: Dict[str, Dict[str, str]] = {
    "wavelog": {
        "url": "https://your-wavelog-url.com",
        "api_key": "your-api-key-here",
        "station_profile_id": "1",
        "timeout": "5000",
    },
    "server": {
        "host": "0.0.0.0",
        "port": "2333",
        "verbose": "true",
        "max_workers": "8",
        "log_file": "wavelog-transport.log",
    },
}


def write_default_config(path: Union[str, Path]) -> None:
    """Write a template configuration file to ``path``."""
    parser = configparser.ConfigParser()
    parser.read_dict(DEFAULT_CONFIG)
    with open(path, "w") as f:
        parser.write(f)


def _read_ini(path: Path) -> Dict[str, Dict[str, Any]]:
    parser = configparser.ConfigParser()
    try:
        with open(path, "r") as f:
            parser.read_file(f)
    except (OSError, configparser.Error) as e:
        raise ConfigurationError(f"failed to parse config file: {e}") from e

    values: Dict[str, Dict[str, Any]] = {}
    for section in ("wavelog", "server"):
        if parser.has_section(section):
            values[section] = dict(parser.items(section))
    return values


def load_settings(path: Union[str, Path] = DEFAULT_CONFIG_FILE) -> Settings:
    """Load and validate settings from an INI file.

    A missing file is replaced by the default template and reported as a
    ``ConfigurationError`` so the operator can fill it in before restarting.
    """
    path = Path(path)
    if not path.exists():
        log_info("config_default_created", path=str(path))
        try:
            write_default_config(path)
        except OSError as e:
            raise ConfigurationError(f"failed to create default config: {e}") from e
        log_info(
            "config_edit_required",
            message=f"Please edit {path} with your Wavelog settings and restart",
        )
        raise ConfigurationError("default config created - please configure and restart")

    try:
        settings = Settings(**_read_ini(path))
    except ValidationError as e:
        raise ConfigurationError(f"failed to map config: {e}") from e

    wavelog = settings.wavelog
    if not wavelog.url or not wavelog.api_key or not wavelog.station_profile_id:
        raise ConfigurationError(
            "missing required Wavelog configuration (url, api_key, station_profile_id)"
        )
    return settings
