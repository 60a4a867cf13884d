from __future__ import annotations

import typer

from .. import console
from ._common import (
    BASE_URL_OPTION,
    JSON_OPTION,
    LANGUAGE_OPTION,
    call_api,
    emit,
    options,
    print_record,
    print_table,
)

app = typer.Typer(help="Series lookups: search, details, episodes, images.")

SERIES_KEYS = ["id", "seriesName", "aliases", "status", "firstAired", "network", "runtime", "imdbId", "overview"]
EPISODE_COLUMNS = ["id", "airedSeason", "airedEpisodeNumber", "episodeName", "firstAired"]
IMAGE_COLUMNS = ["id", "keyType", "subKey", "resolution", "fileName"]


@app.command("search")
def search_series(
        name: str | None = typer.Option(None, "--name", help="Series name."),
        imdb_id: str | None = typer.Option(None, "--imdb-id", help="IMDb id (tt...)."),
        zap2it_id: str | None = typer.Option(None, "--zap2it-id", help="Zap2it id."),
        slug: str | None = typer.Option(None, "--slug", help="Series slug."),
        language: str | None = LANGUAGE_OPTION,
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    query = {"name": name, "imdbId": imdb_id, "zap2itId": zap2it_id, "slug": slug}
    if not any(query.values()):
        console.err("Provide one of --name, --imdb-id, --zap2it-id or --slug.")
        raise typer.Exit(code=2)
    data = call_api(lambda c: c.search_series(query, options(language)), base_url=base_url, action="Search series")
    emit(
        data,
        json_out=json_out,
        render=lambda rows: print_table("Series", rows, ["id", "seriesName", "aliases", "firstAired", "network"]),
    )


@app.command("get")
def get_series(
        series_id: int = typer.Argument(..., help="Series id."),
        language: str | None = LANGUAGE_OPTION,
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    data = call_api(lambda c: c.get_series(series_id, options(language)), base_url=base_url, action="Get series")
    emit(data, json_out=json_out, render=lambda d: print_record(d, SERIES_KEYS))


@app.command("head")
def head_series(
        series_id: int = typer.Argument(..., help="Series id."),
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    headers = call_api(lambda c: c.head_series(series_id), base_url=base_url, action="HEAD series")
    emit(dict(headers), json_out=json_out, render=print_record)


@app.command("actors")
def series_actors(
        series_id: int = typer.Argument(..., help="Series id."),
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    data = call_api(lambda c: c.get_series_actors(series_id), base_url=base_url, action="List actors")
    emit(data, json_out=json_out, render=lambda rows: print_table("Actors", rows, ["id", "name", "role", "sortOrder"]))


@app.command("episodes")
def series_episodes(
        series_id: int = typer.Argument(..., help="Series id."),
        page: int = typer.Option(1, "--page", help="Result page (100 episodes per page)."),
        language: str | None = LANGUAGE_OPTION,
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    data = call_api(
        lambda c: c.get_series_episodes(series_id, page, options(language)),
        base_url=base_url,
        action="List episodes",
    )
    emit(data, json_out=json_out, render=lambda rows: print_table("Episodes", rows, EPISODE_COLUMNS))


@app.command("episodes-query")
def series_episodes_query(
        series_id: int = typer.Argument(..., help="Series id."),
        absolute_number: int | None = typer.Option(None, "--absolute-number"),
        aired_season: int | None = typer.Option(None, "--aired-season"),
        aired_episode: int | None = typer.Option(None, "--aired-episode"),
        dvd_season: int | None = typer.Option(None, "--dvd-season"),
        dvd_episode: int | None = typer.Option(None, "--dvd-episode"),
        imdb_id: str | None = typer.Option(None, "--imdb-id"),
        page: int = typer.Option(1, "--page"),
        language: str | None = LANGUAGE_OPTION,
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    query = {
        "absoluteNumber": absolute_number,
        "airedSeason": aired_season,
        "airedEpisode": aired_episode,
        "dvdSeason": dvd_season,
        "dvdEpisode": dvd_episode,
        "imdbId": imdb_id,
        "page": page,
    }
    data = call_api(
        lambda c: c.query_series_episodes(series_id, query, options(language)),
        base_url=base_url,
        action="Query episodes",
    )
    emit(data, json_out=json_out, render=lambda rows: print_table("Episodes", rows, EPISODE_COLUMNS))


@app.command("summary")
def series_episodes_summary(
        series_id: int = typer.Argument(..., help="Series id."),
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    data = call_api(lambda c: c.get_series_episodes_summary(series_id), base_url=base_url, action="Episode summary")
    emit(data, json_out=json_out, render=print_record)


@app.command("filter")
def filter_series(
        series_id: int = typer.Argument(..., help="Series id."),
        keys: list[str] = typer.Option(..., "--key", "-k", help="Field to keep; repeat for several."),
        language: str | None = LANGUAGE_OPTION,
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    data = call_api(
        lambda c: c.filter_series(series_id, keys, options(language)),
        base_url=base_url,
        action="Filter series",
    )
    emit(data, json_out=json_out, render=print_record)


@app.command("images")
def series_images(
        series_id: int = typer.Argument(..., help="Series id."),
        language: str | None = LANGUAGE_OPTION,
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    data = call_api(lambda c: c.get_series_images(series_id, options(language)), base_url=base_url,
                    action="Image summary")
    emit(data, json_out=json_out, render=print_record)


@app.command("images-query")
def series_images_query(
        series_id: int = typer.Argument(..., help="Series id."),
        key_type: str | None = typer.Option(None, "--key-type", help="fanart, poster, season, seasonwide, series."),
        resolution: str | None = typer.Option(None, "--resolution"),
        sub_key: str | None = typer.Option(None, "--sub-key"),
        language: str | None = LANGUAGE_OPTION,
        base_url: str | None = BASE_URL_OPTION,
        json_out: bool = JSON_OPTION,
):
    query = {"keyType": key_type, "resolution": resolution, "subKey": sub_key}
    data = call_api(
        lambda c: c.query_series_images(series_id, query, options(language)),
        base_url=base_url,
        action="Query images",
    )
    emit(data, json_out=json_out, render=lambda rows: print_table("Images", rows, IMAGE_COLUMNS))


@app.command("params")
def query_params(
        kind: str = typer.Argument(..., help="search, episodes or images."),
        series_id: int | None = typer.Option(None, "--series-id", help="Required for episodes and images."),
        base_url: str | None = BASE_URL_OPTION,
):
    """Show the query keys an endpoint accepts."""
    k = kind.strip().lower()
    if k == "search":
        data = call_api(lambda c: c.search_series_params(), base_url=base_url, action="Search params")
    elif k in {"episodes", "images"}:
        if series_id is None:
            console.err(f"--series-id is required for {k}.")
            raise typer.Exit(code=2)
        if k == "episodes":
            data = call_api(lambda c: c.query_series_episodes_params(series_id), base_url=base_url,
                            action="Episode query params")
        else:
            data = call_api(lambda c: c.query_series_images_params(series_id), base_url=base_url,
                            action="Image query params")
    else:
        console.err(f"Unknown params kind: {kind}")
        raise typer.Exit(code=2)
    console.print_json(data)
