"""Viz — rich rendering of API responses for terminals and notebooks."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table


console = Console()


def print_json(text: str):
    """Print JSON text with syntax highlighting."""
    console.print_json(text)


def find_records(data: Any) -> tuple[str, list[dict]] | None:
    """Locate the first list of objects in a response, e.g. ``statuses`` or ``peers``."""
    if isinstance(data, list) and data and all(isinstance(r, dict) for r in data):
        return "results", data
    if isinstance(data, dict):
        for key, value in data.items():
            if isinstance(value, list) and value and all(isinstance(r, dict) for r in value):
                return key, value
    return None


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def records_table(title: str, rows: list[dict]) -> Table:
    """Build a rich table; columns are the union of keys in first-seen order."""
    columns: list[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)

    table = Table(title=title, show_header=True, header_style="bold cyan")
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*(_cell(row.get(col)) for col in columns))
    return table


def show_records(title: str, rows: list[dict]):
    """Render a list of records as a rich table inline."""
    console.print(records_table(title, rows))
