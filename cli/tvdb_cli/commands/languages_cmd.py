from __future__ import annotations

import typer

from ._common import BASE_URL_OPTION, JSON_OPTION, call_api, emit, print_record, print_table

app = typer.Typer(help="Languages known to the API.")


@app.command("list")
def list_languages(
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    data = call_api(lambda c: c.get_languages(), base_url=base_url, action="List languages")
    emit(
        data,
        json_out=json_out,
        render=lambda rows: print_table("Languages", rows, ["id", "abbreviation", "name", "englishName"]),
    )


@app.command("get")
def get_language(
        language_id: int = typer.Argument(..., help="Language id."),
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    data = call_api(lambda c: c.get_language(language_id), base_url=base_url, action="Get language")
    emit(data, json_out=json_out, render=print_record)
