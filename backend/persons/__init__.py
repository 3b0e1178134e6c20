"""Person records service: HTTP API, async endpoint client and session helpers."""

__version__ = "0.1.0"
