"""Endpoint catalog — one static entry per server route."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loklak.decoder import ApiResponse, decode
from loklak.query import QueryOptions, build_params

if TYPE_CHECKING:
    from loklak.client import ServerConfig
    from loklak.transport import Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Endpoint:
    name: str
    path: str
    method: str = "GET"
    params: tuple[tuple[str, str], ...] = ()  # (QueryOptions attribute, wire name)
    local_only: bool = False  # served by the server to localhost only
    composite_query: bool = False  # fold since/until/from_user into q

    def url(self, config: ServerConfig) -> str:
        base = config.local_url if self.local_only else config.base_url
        return base + self.path

    def invoke(self, transport: Transport, config: ServerConfig, options: QueryOptions | None = None) -> ApiResponse:
        """Build params, send the request, decode the body."""
        params = build_params(self, options)
        url = self.url(config)
        logger.debug(f"{self.name}: {self.method} {url} params={params}")

        if self.method == "POST":
            raw = transport.post_form(url, dict(params))
        else:
            raw = transport.get(url, params)
        return decode(raw)


ENDPOINTS: dict[str, Endpoint] = {
    e.name: e
    for e in (
        Endpoint("hello", "api/hello.json"),
        Endpoint("peers", "api/peers.json"),
        Endpoint("status", "api/status.json"),
        Endpoint("apps", "api/apps.json"),
        Endpoint("settings", "api/settings.json", local_only=True),
        Endpoint(
            "search",
            "api/search.json",
            params=(("query", "q"), ("count", "count"), ("source", "source")),
            composite_query=True,
        ),
        Endpoint(
            "user",
            "api/user.json",
            params=(("screen_name", "screen_name"), ("following", "following"), ("followers", "followers")),
        ),
        Endpoint("account", "api/account.json", params=(("screen_name", "screen_name"),), local_only=True),
        Endpoint(
            "suggest",
            "api/suggest.json",
            params=(
                ("query", "q"),
                ("count", "count"),
                ("source", "source"),
                ("order", "order"),
                ("order_by", "orderby"),
                ("since", "since"),
                ("until", "until"),
            ),
        ),
    )
}


def get_endpoint(name: str) -> Endpoint:
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise KeyError(f"Unknown endpoint '{name}', must be one of {sorted(ENDPOINTS)}") from None
