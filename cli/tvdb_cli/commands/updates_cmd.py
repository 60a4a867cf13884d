from __future__ import annotations

from datetime import datetime

import typer
from rich.table import Table

from .. import console
from ..formatting import format_epoch
from ._common import BASE_URL_OPTION, JSON_OPTION, call_api, emit

app = typer.Typer(help="Series updated in a time window.")


def parse_time(value: str | None) -> datetime | int | None:
    if value is None:
        return None
    text = value.strip()
    if text.isdigit():
        return int(text)
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise typer.BadParameter(f"expected epoch seconds or ISO date, got {value!r}")


def _render(rows) -> None:
    table = Table(title="Updated series")
    table.add_column("id", style="bold")
    table.add_column("lastUpdated")
    for row in rows or []:
        table.add_row(str(row.get("id", "-")), format_epoch(row.get("lastUpdated")))
    console.console.print(table)


@app.command("query")
def query_updated(
        from_time: str = typer.Option(..., "--from", help="Start of window (epoch seconds or ISO date)."),
        to_time: str | None = typer.Option(None, "--to", help="End of window, at most one week after --from."),
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    start = parse_time(from_time)
    end = parse_time(to_time)
    data = call_api(lambda c: c.query_updated(start, end), base_url=base_url, action="Query updates")
    emit(data, json_out=json_out, render=_render)


@app.command("params")
def updated_params(
        base_url: str | None = BASE_URL_OPTION,
):
    data = call_api(lambda c: c.query_updated_params(), base_url=base_url, action="Update query params")
    console.print_json(data)
