"""Forward logged QSOs from UDP broadcasts to a Wavelog logbook."""

__version__ = "0.0.2"
