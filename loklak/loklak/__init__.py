"""loklak — client for the loklak server API."""

from loklak.client import Loklak, ServerConfig
from loklak.decoder import ApiResponse, decode
from loklak.errors import ConfigError, DecodeError, LoklakConnectionError, LoklakError
from loklak.query import QueryOptions

__all__ = [
    "Loklak",
    "ServerConfig",
    "QueryOptions",
    "ApiResponse",
    "decode",
    "LoklakError",
    "LoklakConnectionError",
    "DecodeError",
    "ConfigError",
]
__version__ = "0.1.0"
