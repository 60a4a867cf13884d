from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def format_epoch(value: Any) -> str:
    if value is None or value == "":
        return "-"
    try:
        dt = datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return str(value)
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def format_list(value: Any, *, limit: int = 3) -> str:
    if not value:
        return "-"
    if not isinstance(value, list):
        return str(value)
    items = [str(v) for v in value]
    if len(items) > limit:
        return ", ".join(items[:limit]) + f" (+{len(items) - limit})"
    return ", ".join(items)


def format_cell(value: Any) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, list):
        return format_list(value)
    return str(value)
