"""Response decoding — raw bytes to a generic JSON value and back to indented text."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from loklak.config import JSON_INDENT
from loklak.errors import DecodeError


@dataclass
class ApiResponse:
    data: Any
    raw: bytes = b""

    def pretty(self, indent: int = JSON_INDENT) -> str:
        """Indented JSON text of ``data``."""
        return json.dumps(self.data, indent=indent, ensure_ascii=False)

    def __str__(self):
        return self.pretty()


def decode(raw: bytes) -> ApiResponse:
    """Parse ``raw`` as JSON. Raises DecodeError, never exits."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(str(e), raw) from e
    return ApiResponse(data=data, raw=raw)


def pretty(raw: bytes) -> str:
    return decode(raw).pretty()
