from __future__ import annotations

import os

import typer

from .. import console
from ..config import config_path, default_config, load_config, load_file_config, normalize_base_url, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/tvdb/config.toml).")


def _mask(value: str) -> str:
    return "(set)" if value.strip() else "(empty)"


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        username: str = typer.Option(..., "--username", prompt=True, help="TheTVDB account name."),
        userkey: str = typer.Option(..., "--userkey", prompt=True, hide_input=True, help="TheTVDB user key."),
        apikey: str = typer.Option(..., "--apikey", prompt=True, hide_input=True, help="TheTVDB API key."),
        language: str = typer.Option("", "--language", help="Default Accept-Language."),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        return

    cfg = default_config()
    cfg.auth.username = username.strip()
    cfg.auth.userkey = userkey.strip()
    cfg.auth.apikey = apikey.strip()
    cfg.language = language.strip()
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    cfg = load_config()
    console.console.print(
        f"base_url={cfg.base_url} language={cfg.language or '-'} detect_proxy={str(cfg.detect_proxy).lower()} "
        f"username={cfg.auth.username or '-'} userkey={_mask(cfg.auth.userkey)} apikey={_mask(cfg.auth.apikey)}",
        markup=False,
    )


@app.command("get")
def get_setting(
        key: str = typer.Argument(..., help="Setting key (base_url, language, detect_proxy, username)."),
):
    cfg = load_config()
    k = key.strip().lower()
    if k == "base_url":
        console.console.print(cfg.base_url, markup=False)
        return
    if k == "language":
        console.console.print(cfg.language, markup=False)
        return
    if k == "detect_proxy":
        console.console.print(str(cfg.detect_proxy).lower())
        return
    if k == "username":
        console.console.print(cfg.auth.username, markup=False)
        return
    console.err(f"Unknown setting: {key}")
    raise typer.Exit(code=2)


@app.command("set")
def set_setting(
        base_url: str | None = typer.Option(None, "--base-url", help="Set API base URL."),
        language: str | None = typer.Option(None, "--language", help="Set default Accept-Language (empty to unset)."),
        detect_proxy: bool | None = typer.Option(
            None,
            "--detect-proxy/--no-detect-proxy",
            help="Route requests through http(s)_proxy from the environment.",
        ),
        username: str | None = typer.Option(None, "--username", help="Set account name."),
        userkey: str | None = typer.Option(None, "--userkey", help="Set user key."),
        apikey: str | None = typer.Option(None, "--apikey", help="Set API key."),
):
    # file values only, so TVDB_* env overrides are not persisted
    cfg = load_file_config()
    if base_url is not None:
        normalized = normalize_base_url(base_url)
        if not normalized:
            console.err("Base URL cannot be empty.")
            raise typer.Exit(code=2)
        cfg.base_url = normalized
    if language is not None:
        cfg.language = language.strip()
    if detect_proxy is not None:
        cfg.detect_proxy = detect_proxy
    if username is not None:
        cfg.auth.username = username.strip()
    if userkey is not None:
        cfg.auth.userkey = userkey.strip()
    if apikey is not None:
        cfg.auth.apikey = apikey.strip()
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
