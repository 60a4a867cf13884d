from __future__ import annotations

import json

import httpx
import pytest

from tvdb_client import AuthError, RequestOptions


def test_authenticate_stores_token_and_sends_credentials(fake_api, make_client) -> None:
    client = make_client()

    token = client.authenticate()

    assert token == "token-1"
    assert client.token == "token-1"
    login = fake_api.requests[0]
    assert login.method == "POST"
    assert str(login.url) == "https://api.example.com/login"
    assert json.loads(login.read()) == {"username": "user", "userkey": "user-key", "apikey": "api-key"}


def test_authenticate_full_response(fake_api, make_client) -> None:
    res = make_client(should_return_full_response=True).authenticate()
    assert isinstance(res, httpx.Response)
    assert res.json()["token"] == "token-1"

    res = make_client().authenticate(RequestOptions(should_return_full_response=True))
    assert isinstance(res, httpx.Response)


def test_authenticate_failure_clears_token_and_propagates(fake_api, make_client) -> None:
    client = make_client()
    client.authenticate()
    fake_api.login_status = 401

    with pytest.raises(httpx.HTTPStatusError) as exc:
        client.authenticate()

    assert exc.value.response.status_code == 401
    assert client.token is None
    assert fake_api.logins == 2


def test_authenticate_without_token_in_body(fake_api, make_client) -> None:
    fake_api.login_payload = {"Error": "nope"}
    client = make_client()
    with pytest.raises(AuthError):
        client.authenticate()
    assert client.token is None


def test_first_call_authenticates_before_request(fake_api, make_client) -> None:
    client = make_client()

    serie = client.get_series(121361)

    assert serie["id"] == 121361
    assert [r.url.path for r in fake_api.requests] == ["/login", "/series/121361"]
    assert fake_api.api_requests[0].headers["Authorization"] == "Bearer token-1"


def test_first_call_failure_is_not_retried(fake_api, make_client) -> None:
    client = make_client()
    fake_api.failures = [500]

    with pytest.raises(httpx.HTTPStatusError):
        client.get_series(121361)

    assert fake_api.logins == 1
    assert len(fake_api.api_requests) == 1


def test_held_token_success_does_not_reauthenticate(fake_api, make_client) -> None:
    client = make_client()
    client.authenticate()

    client.get_languages()
    client.get_languages()

    assert fake_api.logins == 1
    assert len(fake_api.api_requests) == 2


def test_held_token_failure_reauthenticates_once_and_retries(fake_api, make_client) -> None:
    client = make_client()
    client.authenticate()
    fake_api.failures = [401]

    languages = client.get_languages()

    assert isinstance(languages, list)
    assert fake_api.logins == 2
    first, second = fake_api.api_requests
    assert first.headers["Authorization"] == "Bearer token-1"
    assert second.headers["Authorization"] == "Bearer token-2"


def test_non_auth_failure_also_retries(fake_api, make_client) -> None:
    client = make_client()
    client.authenticate()
    fake_api.failures = [400]

    client.get_languages()

    assert fake_api.logins == 2
    assert len(fake_api.api_requests) == 2


def test_retry_failure_propagates_second_error(fake_api, make_client) -> None:
    client = make_client()
    client.authenticate()
    fake_api.failures = [401, 404]

    with pytest.raises(httpx.HTTPStatusError) as exc:
        client.get_languages()

    assert exc.value.response.status_code == 404
    assert fake_api.logins == 2
    assert len(fake_api.api_requests) == 2


def test_reauthentication_failure_propagates(fake_api, make_client) -> None:
    client = make_client()
    client.authenticate()
    fake_api.failures = [401]
    fake_api.login_status = 401

    with pytest.raises(httpx.HTTPStatusError) as exc:
        client.get_languages()

    assert exc.value.request.url.path == "/login"
    assert client.token is None
    assert len(fake_api.api_requests) == 1


def test_execute_authenticated_factory_fails_once_then_succeeds(make_client, monkeypatch) -> None:
    client = make_client()
    client.authenticate()
    calls = {"auth": 0, "factory": 0}
    original = client.authenticate

    def counting_authenticate(*args, **kwargs):
        calls["auth"] += 1
        return original(*args, **kwargs)

    monkeypatch.setattr(client, "authenticate", counting_authenticate)
    request = httpx.Request("GET", "https://api.example.com/x")

    def factory():
        calls["factory"] += 1
        if calls["factory"] == 1:
            raise httpx.ConnectError("boom", request=request)
        return "ok"

    assert client.execute_authenticated(factory) == "ok"
    assert calls == {"auth": 1, "factory": 2}


def test_reauthenticate_skips_login_when_token_already_replaced(fake_api, make_client) -> None:
    client = make_client()
    client.authenticate()

    client._reauthenticate("an-older-token")

    assert fake_api.logins == 1
    assert client.token == "token-1"


def test_execute_authenticated_retries_non_http_errors(fake_api, make_client) -> None:
    client = make_client()
    client.authenticate()
    calls = {"factory": 0}

    def factory():
        calls["factory"] += 1
        if calls["factory"] == 1:
            raise RuntimeError("transient")
        return "ok"

    assert client.execute_authenticated(factory) == "ok"
    assert calls["factory"] == 2
    assert fake_api.logins == 2
    assert client.token == "token-2"
