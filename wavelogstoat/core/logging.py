"""Structured logging utilities for the transport service."""

import json
import logging
import os
from typing import Optional


LOG = logging.getLogger("wavelogstoat")
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"

if not LOG.hasHandlers():
    handler = logging.StreamHandler()
    formatter = logging.Formatter(LOG_FORMAT)
    handler.setFormatter(formatter)
    LOG.addHandler(handler)
LOG.setLevel(logging.INFO)


def configure_logging(log_file: Optional[str] = None) -> None:
    """Attach an append-mode log file next to the console handler.

    Calling this twice with the same file does not add a second handler.
    """
    if not log_file:
        return

    path = os.path.abspath(log_file)
    for existing in LOG.handlers:
        if isinstance(existing, logging.FileHandler) and existing.baseFilename == path:
            return

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    LOG.addHandler(file_handler)


def log_info(event: str, **kwargs: object) -> None:
    """Log an informational event as structured JSON."""
    log = {"level": "info", "event": event, **kwargs}
    LOG.info(json.dumps(log, default=str))


def log_warning(event: str, **kwargs: object) -> None:
    """Log a warning event as structured JSON."""
    log = {"level": "warning", "event": event, **kwargs}
    LOG.warning(json.dumps(log, default=str))


def log_error(event: str, **kwargs: object) -> None:
    """Log an error event as structured JSON."""
    log = {"level": "error", "event": event, **kwargs}
    LOG.error(json.dumps(log, default=str))


def redact(value: str) -> str:
    """Mask a secret such as an API key, keeping the last four characters."""
    if not value:
        return value
    if len(value) <= 4:
        return "<redacted>"
    return "<redacted>" + value[-4:]
