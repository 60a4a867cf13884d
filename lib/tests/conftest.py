from __future__ import annotations

import httpx
import pytest

from tvdb_client import ClientConfig, Credentials, TvdbClient

BASE_URL = "https://api.example.com/"

SERIES = {
    "en": {"id": 121361, "seriesName": "Game of Thrones", "aliases": ["GoT"]},
    "fr": {"id": 121361, "seriesName": "Game of Thrones", "aliases": ["Le Trône de fer"]},
}


class FakeTvdb:
    """In-memory stand-in for the remote API, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.logins = 0
        self.login_status = 200
        self.login_payload: dict | None = None
        self.failures: list[int] = []

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path != "/login"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/login":
            self.logins += 1
            if self.login_status != 200:
                return httpx.Response(self.login_status, json={"Error": "Not Authorized"})
            payload = self.login_payload if self.login_payload is not None else {"token": f"token-{self.logins}"}
            return httpx.Response(200, json=payload)

        if self.failures:
            return httpx.Response(self.failures.pop(0), json={"Error": "Not Authorized"})

        lang = request.headers.get("Accept-Language") or "en"
        if path == "/languages":
            return httpx.Response(200, json={"data": [{"id": 7, "abbreviation": "en"}, {"id": 17, "abbreviation": "fr"}]})
        if path.startswith("/languages/"):
            return httpx.Response(200, json={"data": {"id": int(path.rsplit("/", 1)[1])}})
        if path == "/series/121361":
            if request.method == "HEAD":
                return httpx.Response(200, headers={"date": "Mon, 01 Jan 2018 00:00:00 GMT"})
            return httpx.Response(200, json={"data": SERIES.get(lang, SERIES["en"])})
        if path == "/episodes/3254641":
            name = "L'hiver vient" if lang == "fr" else "Winter Is Coming"
            return httpx.Response(200, json={"data": {"id": 3254641, "episodeName": name}})
        return httpx.Response(200, json={"data": []})


@pytest.fixture()
def fake_api() -> FakeTvdb:
    return FakeTvdb()


@pytest.fixture()
def make_client(fake_api):
    clients: list[TvdbClient] = []

    def _make(**cfg_kwargs) -> TvdbClient:
        cfg_kwargs.setdefault("base_url", BASE_URL)
        cfg_kwargs.setdefault("should_detect_proxy", False)
        client = TvdbClient(
            Credentials(username="user", userkey="user-key", apikey="api-key"),
            ClientConfig(**cfg_kwargs),
            http_transport=httpx.MockTransport(fake_api.handler),
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
