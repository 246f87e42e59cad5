"""Exceptions raised by the GBIF name lookup client."""

from __future__ import annotations


class GbifNamesError(Exception):
    """Base exception for this package."""


class InvalidArgumentError(GbifNamesError, ValueError):
    """Bad input detected before any request is sent."""


class TransportError(GbifNamesError):
    """Network, HTTP or decoding failure while talking to GBIF."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
