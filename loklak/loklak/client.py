"""Loklak — main entry point for the client. One method per server endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Sequence

import httpx
import yaml

from loklak.catalog import get_endpoint
from loklak.config import API_PREFIX, DEFAULT_BASE_URL, DEFAULT_TIMEOUT, LOCAL_URL
from loklak.decoder import ApiResponse, decode
from loklak.errors import ConfigError
from loklak.query import QueryOptions
from loklak.transport import Transport

logger = logging.getLogger(__name__)


def _normalize_url(url: str, what: str) -> str:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigError(f"Invalid {what} {url!r}: {e}") from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ConfigError(f"Invalid {what} {url!r}: expected an absolute http(s) URL")
    return url if url.endswith("/") else url + "/"


@dataclass(frozen=True)
class ServerConfig:
    """Where to send requests. URLs are validated and end with ``/``."""

    base_url: str = DEFAULT_BASE_URL
    local_url: str = LOCAL_URL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        object.__setattr__(self, "base_url", _normalize_url(self.base_url, "base URL"))
        object.__setattr__(self, "local_url", _normalize_url(self.local_url, "local URL"))
        try:
            object.__setattr__(self, "timeout", float(self.timeout))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid timeout {self.timeout!r}: expected a number of seconds") from e

    @classmethod
    def load(cls, path: str | Path) -> ServerConfig:
        """Load from a YAML mapping (base_url, local_url, timeout)."""
        path = Path(path)
        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"{path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


class Loklak:
    """Client for a loklak server.

    Usage:
        lk = Loklak("http://localhost:9000")
        print(lk.hello())
        print(lk.search(query="fossasia", since="2024-01-01", count="10"))
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        config: ServerConfig | None = None,
        http: httpx.Client | None = None,
        local_url: str = LOCAL_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.config = config or ServerConfig(base_url=base_url, local_url=local_url, timeout=timeout)
        self._transport = Transport(http, timeout=self.config.timeout)

    # ----- Generic -----

    def fetch(self, endpoint: str, options: QueryOptions | None = None, **overrides) -> ApiResponse:
        """Call ``endpoint`` and return the decoded response.

        Keyword ``overrides`` replace fields of ``options`` on a copy; the caller's
        instance is left untouched.
        """
        if overrides:
            options = (options or QueryOptions()).merged(**overrides)
        return get_endpoint(endpoint).invoke(self._transport, self.config, options)

    def _pretty(self, endpoint: str, options: QueryOptions | None = None, **overrides) -> str:
        return self.fetch(endpoint, options, **overrides).pretty()

    # ----- Status -----

    def hello(self) -> str:
        """/api/hello.json"""
        return self._pretty("hello")

    def peers(self) -> str:
        """/api/peers.json"""
        return self._pretty("peers")

    def status(self) -> str:
        """/api/status.json"""
        return self._pretty("status")

    def apps(self) -> str:
        """/api/apps.json"""
        return self._pretty("apps")

    def settings(self) -> str:
        """/api/settings.json: always sent to the local address."""
        return self._pretty("settings")

    # ----- Queries -----

    def search(self, options: QueryOptions | None = None, **overrides) -> str:
        """/api/search.json: q, count, source.

        since, until and from_user are folded into q.
        """
        return self._pretty("search", options, **overrides)

    def user(self, options: QueryOptions | None = None, **overrides) -> str:
        """/api/user.json: screen_name, following, followers."""
        return self._pretty("user", options, **overrides)

    def account(self, options: QueryOptions | None = None, **overrides) -> str:
        """/api/account.json: always sent to the local address."""
        return self._pretty("account", options, **overrides)

    def suggest(self, options: QueryOptions | None = None, **overrides) -> str:
        """/api/suggest.json: q, count, source, order, orderby, since, until."""
        return self._pretty("suggest", options, **overrides)

    # ----- Raw calls -----

    def call_raw(self, call: str, values: Mapping[str, str | Sequence[str]] | None = None) -> bytes:
        """POST ``values`` form-encoded to ``<base>/api/<call>`` and return the body."""
        url = self.config.base_url + API_PREFIX + call.lstrip("/")
        logger.debug(f"raw call {call!r} -> POST {url}")
        return self._transport.post_form(url, values or {})

    def call(self, call: str, values: Mapping[str, str | Sequence[str]] | None = None) -> Any:
        """Like :meth:`call_raw`, decoded from JSON."""
        return decode(self.call_raw(call, values)).data

    def close(self):
        self._transport.close()

    def __enter__(self) -> Loklak:
        return self

    def __exit__(self, *exc):
        self.close()

    def __repr__(self):
        return f"Loklak(base_url={self.config.base_url!r})"
