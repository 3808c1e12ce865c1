"""Project-native typed exceptions for Hava HTTP transport failures."""

from __future__ import annotations


class HavaAdapterError(Exception):
    """Base exception for adapter-level Hava API failures.

    Attributes:
        url: Request URL that failed, when known.
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class HavaTransportError(HavaAdapterError, ConnectionError):
    """Transport-level connectivity failure during Hava API communication."""


class HavaRequestTimeoutError(HavaAdapterError, TimeoutError):
    """Single HTTP request exceeded the configured request timeout."""
