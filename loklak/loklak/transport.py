"""Transport — single-attempt HTTP GET / form POST returning raw bytes."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

import httpx

from loklak.config import DEFAULT_TIMEOUT, USER_AGENT
from loklak.errors import LoklakConnectionError

logger = logging.getLogger(__name__)


class Transport:
    """Thin wrapper over an httpx client.

    Pass your own ``httpx.Client`` to control timeouts, proxies or mounts;
    otherwise one is created and owned by the transport.
    """

    def __init__(self, http: httpx.Client | None = None, timeout: float = DEFAULT_TIMEOUT):
        self._owns_http = http is None
        self._http = http or httpx.Client(timeout=timeout, headers={"User-Agent": USER_AGENT})

    def get(self, url: str, params: Sequence[tuple[str, str]] = ()) -> bytes:
        """GET ``url`` with ``params`` as the query string. No params, no query string."""
        return self._send("GET", url, params=list(params) or None)

    def post_form(self, url: str, fields: Mapping[str, str | Sequence[str]]) -> bytes:
        """POST ``fields`` form-encoded to ``url``."""
        data = {k: v if isinstance(v, str) else list(v) for k, v in fields.items()}
        return self._send("POST", url, data=data)

    def _send(self, method: str, url: str, **kwargs) -> bytes:
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.TransportError as e:
            logger.debug(f"{method} {url} failed: {e!r}")
            raise LoklakConnectionError(url, str(e) or type(e).__name__) from e

        body = response.content
        logger.debug(f"{method} {response.request.url} -> {response.status_code} ({len(body)} bytes)")
        if not response.is_success:
            # Status codes are not an error at this layer; the body goes back as-is.
            logger.warning(f"{method} {response.request.url} returned HTTP {response.status_code}")
        return body

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    def close(self):
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *exc):
        self.close()
