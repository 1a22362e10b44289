"""Query options — one flat set of optional fields shared by every endpoint."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields as dataclass_fields, replace
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from loklak.errors import ConfigError

if TYPE_CHECKING:
    from loklak.catalog import Endpoint

# Modifier suffixes for the composite search term, in the order they are appended.
SEARCH_MODIFIERS = (
    ("since", "since"),
    ("until", "until"),
    ("from_user", "from"),
)


def _as_text(name: str, value):
    """Coerce a scalar option value to the string sent on the wire."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, (int, float)):
        return str(value)
    raise ConfigError(f"Query option '{name}' must be a string, got {type(value).__name__}")


@dataclass
class QueryOptions:
    """Search and filter options. ``None`` or ``""`` means "leave it out"."""

    name: str | None = None
    followers: str | None = None
    following: str | None = None
    query: str | None = None
    since: str | None = None
    until: str | None = None
    source: str | None = None
    count: str | None = None
    fields: str | None = None
    from_user: str | None = None
    limit: str | None = None
    screen_name: str | None = None
    order: str | None = None
    order_by: str | None = None

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in dataclass_fields(cls)]

    @classmethod
    def from_dict(cls, d: dict) -> QueryOptions:
        """Build from a mapping, ignoring unknown keys. Values are kept as strings."""
        known = set(cls.field_names())
        return cls(**{k: _as_text(k, v) for k, v in d.items() if k in known})

    @classmethod
    def load(cls, path: str | Path) -> QueryOptions:
        """Load saved options from a YAML file.

        Scalars are read verbatim (``count: 0``, ``order: no`` and
        ``since: 2024-01-01`` all stay text), so nothing is lost to YAML typing.
        """
        path = Path(path)
        with open(path) as f:
            try:
                data = yaml.load(f, Loader=yaml.BaseLoader) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"{path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a mapping of query options, got {type(data).__name__}")
        return cls.from_dict(data)

    def merged(self, **overrides) -> QueryOptions:
        """Copy with ``overrides`` applied; ``None`` overrides are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> dict:
        """Only the fields that are set."""
        return {k: v for k, v in asdict(self).items() if v}

    def save(self, path: str | Path):
        """Save options to YAML."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def search_term(options: QueryOptions) -> str | None:
    """Compose ``q`` for the search endpoint.

    ``climate`` + since/until/from → ``climate since:X until:Y from:Z``.
    Modifiers are dropped entirely when there is no base query.
    """
    if not options.query:
        return None
    term = options.query
    for attr, keyword in SEARCH_MODIFIERS:
        value = getattr(options, attr)
        if value:
            term += f" {keyword}:{value}"
    return term


def build_params(endpoint: Endpoint, options: QueryOptions | None) -> list[tuple[str, str]]:
    """Render ``options`` into ordered ``(name, value)`` pairs for ``endpoint``.

    Empty fields never produce a pair.
    """
    if options is None:
        return []

    params = []
    for attr, wire_name in endpoint.params:
        if attr == "query" and endpoint.composite_query:
            value = search_term(options)
        else:
            value = getattr(options, attr)
        if value:
            params.append((wire_name, value))
    return params
