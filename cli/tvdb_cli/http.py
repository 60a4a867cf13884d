from __future__ import annotations

from tvdb_client import TvdbClient
from tvdb_client.config_types import ClientConfig, Credentials

from .config import AppConfig, normalize_base_url


def make_client(
    cfg: AppConfig,
    *,
    base_url_override: str | None = None,
) -> TvdbClient:
    base_url = normalize_base_url(base_url_override) or cfg.base_url
    return TvdbClient(
        Credentials(
            username=cfg.auth.username or None,
            userkey=cfg.auth.userkey or None,
            apikey=cfg.auth.apikey or None,
        ),
        ClientConfig(
            base_url=base_url,
            default_language=cfg.language or None,
            should_detect_proxy=cfg.detect_proxy,
        ),
    )
