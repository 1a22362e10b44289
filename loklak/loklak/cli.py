"""Command-line access to a loklak server.

Usage:
    loklak hello
    loklak --server http://localhost:9000 search --query fossasia --since 2024-01-01 --count 5
    loklak --options saved-query.yaml --table search
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

import httpx

from loklak.catalog import ENDPOINTS
from loklak.client import Loklak, ServerConfig
from loklak.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, LOCAL_URL
from loklak.errors import LoklakError
from loklak.query import QueryOptions
from loklak.viz import find_records, print_json, show_records

logger = logging.getLogger("loklak")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="loklak", description="Query a loklak server")
    parser.add_argument(
        "--server",
        default=os.environ.get("LOKLAK_SERVER", DEFAULT_BASE_URL),
        help="Server base URL (default: $LOKLAK_SERVER or %(default)s)",
    )
    parser.add_argument("--local-url", default=LOCAL_URL, help="Address for settings/account")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT)
    parser.add_argument("--options", metavar="FILE", help="YAML file with saved query options")
    parser.add_argument("--table", action="store_true", help="Render record lists as a table")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("endpoint", choices=list(ENDPOINTS))

    fields = parser.add_argument_group("query options")
    for name in QueryOptions.field_names():
        fields.add_argument(f"--{name.replace('_', '-')}", dest=name, metavar="VALUE")
    return parser


def main(argv: list[str] | None = None, http: httpx.Client | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(message)s",
    )

    try:
        config = ServerConfig(base_url=args.server, local_url=args.local_url, timeout=args.timeout)
        options = QueryOptions.load(args.options) if args.options else QueryOptions()
        options = options.merged(**{name: getattr(args, name) for name in QueryOptions.field_names()})

        with Loklak(config=config, http=http) as lk:
            response = lk.fetch(args.endpoint, options)
    except (LoklakError, OSError) as e:
        logger.error(str(e))
        return 1

    records = find_records(response.data) if args.table else None
    if records:
        key, rows = records
        show_records(f"{args.endpoint}: {key}", rows)
    else:
        print_json(response.pretty())
    return 0


if __name__ == "__main__":
    sys.exit(main())
