from __future__ import annotations

import typer

from ._common import BASE_URL_OPTION, JSON_OPTION, LANGUAGE_OPTION, call_api, emit, options, print_record

app = typer.Typer(help="Single episodes.")

EPISODE_KEYS = [
    "id",
    "seriesId",
    "airedSeason",
    "airedEpisodeNumber",
    "episodeName",
    "firstAired",
    "overview",
    "language",
]


@app.command("get")
def get_episode(
        episode_id: int = typer.Argument(..., help="Episode id."),
        language: str | None = LANGUAGE_OPTION,
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    data = call_api(lambda c: c.get_episode(episode_id, options(language)), base_url=base_url, action="Get episode")
    emit(data, json_out=json_out, render=lambda d: print_record(d, EPISODE_KEYS))
