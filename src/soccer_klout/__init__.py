"""Soccer player influence (klout) scoring service."""

__version__ = "0.1.0"
