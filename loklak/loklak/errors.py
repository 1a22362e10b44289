"""Exceptions raised by the client. Nothing in the library exits the process."""

from __future__ import annotations


class LoklakError(Exception):
    """Base class for all loklak client errors."""


class LoklakConnectionError(LoklakError):
    """The server could not be reached (connect failure, timeout, protocol error)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"loklak: error while requesting {url}: {reason}")
        self.url = url
        self.reason = reason


class DecodeError(LoklakError):
    """The response body is not valid JSON."""

    def __init__(self, message: str, raw: bytes = b""):
        super().__init__(f"loklak: error while decoding json data: {message}")
        self.raw = raw


class ConfigError(LoklakError):
    """Malformed server configuration."""
