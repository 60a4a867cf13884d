from __future__ import annotations

import typer

from .commands import auth_cmd, episodes_cmd, languages_cmd, series_cmd, settings_cmd, updates_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="tvdb",
        help="TheTVDB API client",
        no_args_is_help=True,
    )

    app.add_typer(settings_cmd.app, name="settings")
    app.command("login")(auth_cmd.login)
    app.add_typer(languages_cmd.app, name="languages")
    app.add_typer(series_cmd.app, name="series")
    app.add_typer(episodes_cmd.app, name="episodes")
    app.add_typer(updates_cmd.app, name="updates")

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()
