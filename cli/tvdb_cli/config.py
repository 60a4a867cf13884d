from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from tvdb_client.config_types import DEFAULT_BASE_URL

APP_NAME = "tvdb"
CONFIG_FILENAME = "config.toml"

ENV_BASE_URL = "TVDB_BASE_URL"
ENV_LANGUAGE = "TVDB_LANGUAGE"
ENV_USERNAME = "TVDB_USERNAME"
ENV_USER_KEY = "TVDB_USER_KEY"
ENV_API_KEY = "TVDB_API_KEY"


@dataclass
class AuthConfig:
    username: str = ""
    userkey: str = ""
    apikey: str = ""


@dataclass
class AppConfig:
    base_url: str
    auth: AuthConfig
    language: str = ""
    detect_proxy: bool = True


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(
        base_url=DEFAULT_BASE_URL,
        auth=AuthConfig(),
        language="",
        detect_proxy=True,
    )


def normalize_base_url(raw: str | None) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value
    host = value.split("/", 1)[0].split(":", 1)[0].lower()
    scheme = "http://" if host in {"localhost", "127.0.0.1", "0.0.0.0"} else "https://"
    return f"{scheme}{value}"


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "base_url": cfg.base_url,
        "language": cfg.language,
        "detect_proxy": cfg.detect_proxy,
        "auth": {
            "username": cfg.auth.username,
            "userkey": cfg.auth.userkey,
            "apikey": cfg.auth.apikey,
        },
    }


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    base_url = normalize_base_url(str(data.get("base_url") or ""))
    if base_url:
        cfg.base_url = base_url
    cfg.language = str(data.get("language") or "").strip()
    detect_proxy = data.get("detect_proxy")
    if isinstance(detect_proxy, bool):
        cfg.detect_proxy = detect_proxy
    auth_raw = data.get("auth") or {}
    if isinstance(auth_raw, dict):
        cfg.auth = AuthConfig(
            username=str(auth_raw.get("username") or ""),
            userkey=str(auth_raw.get("userkey") or ""),
            apikey=str(auth_raw.get("apikey") or ""),
        )
    return cfg


def apply_env(cfg: AppConfig) -> AppConfig:
    base_url = normalize_base_url(os.getenv(ENV_BASE_URL, ""))
    if base_url:
        cfg.base_url = base_url
    language = os.getenv(ENV_LANGUAGE, "").strip()
    if language:
        cfg.language = language
    username = os.getenv(ENV_USERNAME, "").strip()
    if username:
        cfg.auth.username = username
    userkey = os.getenv(ENV_USER_KEY, "").strip()
    if userkey:
        cfg.auth.userkey = userkey
    apikey = os.getenv(ENV_API_KEY, "").strip()
    if apikey:
        cfg.auth.apikey = apikey
    return cfg


def load_file_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def load_config() -> AppConfig:
    """Config file values, overridden by TVDB_* environment variables."""
    return apply_env(load_file_config())


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
