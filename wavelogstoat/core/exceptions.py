"""Custom exceptions for the Wavelog transport."""


class WavelogStoatError(Exception):
    """Base exception for the Wavelog transport."""

    pass


class ParseError(WavelogStoatError):
    """Raised when a contact payload cannot be turned into a record."""

    pass


class TransportError(WavelogStoatError):
    """Raised when a record could not be delivered to Wavelog."""

    pass


class ConfigurationError(WavelogStoatError):
    """Raised when configuration is missing or invalid."""

    pass
