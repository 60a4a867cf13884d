from __future__ import annotations

import typer

from .. import console
from ..config import load_config
from ._common import BASE_URL_OPTION, call_api


def login(
        show_token: bool = typer.Option(False, "--show-token", help="Print the session token."),
        base_url: str | None = BASE_URL_OPTION,
):
    """Check the configured credentials against POST /login."""
    cfg = load_config()
    if not (cfg.auth.apikey and cfg.auth.username and cfg.auth.userkey):
        console.warn("Credentials are incomplete. Run `tvdb settings init` or set TVDB_USERNAME/TVDB_USER_KEY/TVDB_API_KEY.")

    token = call_api(lambda client: client.authenticate(), base_url=base_url, action="Login")
    console.ok("Login successful.")
    if show_token:
        console.console.print(token, markup=False, soft_wrap=True)
