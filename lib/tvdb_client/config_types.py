from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_BASE_URL = "https://api.thetvdb.com/"
DEFAULT_USER_AGENT = "tvdb-client/0.1.0"


@dataclass(frozen=True)
class Credentials:
    username: str | None = field(default=None, repr=False)
    userkey: str | None = field(default=None, repr=False)
    apikey: str | None = field(default=None, repr=False)

    def login_body(self) -> dict[str, str | None]:
        return {"username": self.username, "userkey": self.userkey, "apikey": self.apikey}


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    default_language: str | None = None
    should_return_full_response: bool = False
    should_detect_proxy: bool = True
    timeout_s: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class RequestOptions:
    """Per-call overrides. ``None`` means "use the client default"."""

    language: str | None = None
    should_return_full_response: bool | None = None
