from __future__ import annotations

import httpx
import pytest
from typer.testing import CliRunner

from tvdb_client import ClientConfig, Credentials, TvdbClient
from tvdb_cli import config, main
from tvdb_cli.commands import _common, updates_cmd


class _FakeApi:
    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/login":
            return httpx.Response(200, json={"token": "tok"})
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"Error": "Resource not found"})
        if request.url.path == "/series/121361":
            return httpx.Response(200, json={"data": {"id": 121361, "seriesName": "Game of Thrones"}})
        if request.url.path == "/languages":
            return httpx.Response(200, json={"data": [{"id": 7, "abbreviation": "en", "name": "English"}]})
        return httpx.Response(200, json={"data": []})


@pytest.fixture()
def fake_api(monkeypatch, tmp_path) -> _FakeApi:
    api = _FakeApi()

    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)
    for name in (config.ENV_BASE_URL, config.ENV_LANGUAGE, config.ENV_USERNAME, config.ENV_USER_KEY, config.ENV_API_KEY):
        monkeypatch.delenv(name, raising=False)

    def _make_client(cfg, *, base_url_override=None):
        return TvdbClient(
            Credentials(username="user", userkey="uk", apikey="ak"),
            ClientConfig(base_url="https://api.example.com/", should_detect_proxy=False),
            http_transport=httpx.MockTransport(api.handler),
        )

    monkeypatch.setattr(_common, "make_client", _make_client)
    return api


def test_help_lists_command_groups() -> None:
    result = CliRunner().invoke(main.app, ["--help"])
    assert result.exit_code == 0
    for name in ("settings", "login", "languages", "series", "episodes", "updates"):
        assert name in result.output


def test_series_get_json_passes_language(fake_api) -> None:
    result = CliRunner().invoke(main.app, ["series", "get", "121361", "--language", "fr", "--json"])

    assert result.exit_code == 0, result.output
    assert '"id": 121361' in result.output
    assert fake_api.requests[-1].headers["Accept-Language"] == "fr"


def test_languages_list_table(fake_api) -> None:
    result = CliRunner().invoke(main.app, ["languages", "list"])
    assert result.exit_code == 0, result.output
    assert "English" in result.output


def test_http_error_exits_with_code_2(fake_api) -> None:
    fake_api.status_code = 404
    result = CliRunner().invoke(main.app, ["episodes", "get", "1"])
    assert result.exit_code == 2
    assert "failed" in result.output


def test_login_reports_success(fake_api) -> None:
    result = CliRunner().invoke(main.app, ["login", "--show-token"])
    assert result.exit_code == 0, result.output
    assert "Login successful" in result.output
    assert "tok" in result.output


def test_series_search_requires_a_criterion(fake_api) -> None:
    result = CliRunner().invoke(main.app, ["series", "search"])
    assert result.exit_code == 2
    assert fake_api.requests == []


def test_settings_set_and_show_masks_keys(fake_api) -> None:
    runner = CliRunner()
    result = runner.invoke(main.app, ["settings", "set", "--apikey", "secret-key", "--language", "fr"])
    assert result.exit_code == 0, result.output

    result = runner.invoke(main.app, ["settings", "show"])
    assert result.exit_code == 0
    assert "language=fr" in result.output
    assert "apikey=(set)" in result.output
    assert "secret-key" not in result.output


def test_parse_time_accepts_epoch_and_iso() -> None:
    assert updates_cmd.parse_time("1514764800") == 1514764800
    assert updates_cmd.parse_time("2018-01-01T00:00:00Z").year == 2018
    assert updates_cmd.parse_time(None) is None


def test_record_output_uses_field_lines(fake_api) -> None:
    result = CliRunner().invoke(main.app, ["series", "get", "121361"])
    assert result.exit_code == 0, result.output
    assert "id: 121361" in result.output
    assert "seriesName: Game of Thrones" in result.output
