from __future__ import annotations

from typing import Any, Callable, Iterable

import httpx
import typer
from rich.table import Table

from tvdb_client import RequestOptions, TvdbClient, TvdbClientError
from tvdb_client.errors import describe_http_error

from .. import console
from ..config import load_config
from ..formatting import format_cell
from ..http import make_client

LANGUAGE_OPTION = typer.Option(None, "--language", "-l", help="Accept-Language for this call (e.g. fr).")
BASE_URL_OPTION = typer.Option(None, "--base-url", help="Override API base URL.")
JSON_OPTION = typer.Option(False, "--json", help="Print raw JSON.")


def call_api(fn: Callable[[TvdbClient], Any], *, base_url: str | None, action: str) -> Any:
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        return fn(client)
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 401:
            console.err(f"{action} failed: unauthorized. Check credentials with `tvdb settings show`.")
        else:
            console.err(f"{action} failed: {describe_http_error(e)}")
        raise typer.Exit(code=2)
    except (httpx.RequestError, TvdbClientError) as e:
        console.err(f"{action} failed: {describe_http_error(e)}")
        raise typer.Exit(code=2)
    finally:
        client.close()


def options(language: str | None) -> RequestOptions | None:
    if not language:
        return None
    return RequestOptions(language=language)


def print_table(title: str, rows: Iterable[dict], columns: list[str]) -> None:
    table = Table(title=title)
    for i, col in enumerate(columns):
        table.add_column(col, style="bold" if i == 0 else None)
    for row in rows or []:
        if not isinstance(row, dict):
            continue
        table.add_row(*(format_cell(row.get(col)) for col in columns))
    console.console.print(table)


def print_record(data: Any, keys: list[str] | None = None) -> None:
    if not isinstance(data, dict):
        console.print_json(data)
        return
    for key in keys or list(data.keys()):
        if key in data:
            console.field(key, data.get(key))


def emit(data: Any, *, json_out: bool, render: Callable[[Any], None]) -> None:
    if json_out:
        console.print_json(data)
        return
    render(data)
