from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping, TypeVar
from urllib.parse import quote

import httpx

from .config_types import ClientConfig, Credentials, RequestOptions
from .errors import AuthError
from .transport import RequestSpec, Transport

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _seg(value: Any) -> str:
    return quote(str(value), safe="")


def _epoch(value: datetime | int | float | None) -> int | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    return int(value)


def _token_from(r: httpx.Response) -> str | None:
    try:
        data = r.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        token = data.get("token")
        if isinstance(token, str) and token:
            return token
    return None


class TvdbClient:
    """Client for the TheTVDB JSON API.

    Every endpoint method goes through :meth:`execute_authenticated`, which
    logs in on first use and re-authenticates once when a request fails.
    Endpoint methods return the ``data`` payload, or the ``httpx.Response``
    itself when ``should_return_full_response`` is in effect.
    """

    def __init__(
            self,
            credentials: Credentials | None = None,
            cfg: ClientConfig | None = None,
            *,
            http_transport: httpx.BaseTransport | None = None,
    ):
        self._credentials = credentials or Credentials()
        self._cfg = cfg or ClientConfig()
        self._token: str | None = None
        self._auth_lock = threading.Lock()
        self._t = Transport(self._cfg, lambda: self._token, http_transport=http_transport)

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    @property
    def token(self) -> str | None:
        return self._token

    def close(self) -> None:
        self._t.close()

    def __enter__(self) -> "TvdbClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _full_response(self, options: RequestOptions | None) -> bool:
        if options is not None and options.should_return_full_response is not None:
            return options.should_return_full_response
        return self._cfg.should_return_full_response

    # --- auth ---
    def authenticate(self, options: RequestOptions | None = None) -> str | httpx.Response:
        """POST /login with the configured credentials and keep the returned token.

        Returns the token, or the login response when full responses are
        requested. Any failure clears the held token and propagates.
        """
        spec = RequestSpec("POST", "/login", json_body=self._credentials.login_body())
        try:
            r = self._t.send(spec)
        except Exception as exc:
            self._token = None
            logger.warning("TVDB login failed: %s", type(exc).__name__)
            raise

        token = _token_from(r)
        if token is None:
            self._token = None
            raise AuthError("login returned no token")
        self._token = token
        logger.debug("TVDB login succeeded")
        return r if self._full_response(options) else token

    def _reauthenticate(self, stale: str | None) -> None:
        with self._auth_lock:
            if self._token is not None and self._token != stale:
                # another caller already replaced the token we used
                return
            self.authenticate()

    def execute_authenticated(self, request_factory: Callable[[], T]) -> T:
        """Run ``request_factory`` with a valid token.

        Without a token, authenticate first and make a single attempt.
        With a token, a failed first attempt triggers one re-authentication
        and exactly one more attempt, whose outcome is final.
        """
        if self._token is None:
            self._reauthenticate(None)
            return request_factory()

        used = self._token
        try:
            return request_factory()
        except Exception as exc:
            logger.info("TVDB request failed (%s), re-authenticating", exc)
        self._reauthenticate(used)
        return request_factory()

    # --- plumbing ---
    def _send(
            self,
            method: str,
            path: str,
            *,
            params: Mapping[str, Any] | None = None,
            options: RequestOptions | None = None,
    ) -> httpx.Response:
        headers: dict[str, str] = {}
        if options is not None and options.language:
            headers["Accept-Language"] = options.language
        query = dict(params or {})

        def factory() -> httpx.Response:
            return self._t.send(RequestSpec(method, path, params=query, headers=dict(headers)))

        return self.execute_authenticated(factory)

    def _data(self, path: str, *, params: Mapping[str, Any] | None = None,
              options: RequestOptions | None = None) -> Any:
        r = self._send("GET", path, params=params, options=options)
        if self._full_response(options):
            return r
        body = r.json()
        return body.get("data") if isinstance(body, dict) else body

    # --- languages ---
    def get_languages(self, options: RequestOptions | None = None) -> Any:
        return self._data("/languages", options=options)

    def get_language(self, language_id: int | str, options: RequestOptions | None = None) -> Any:
        return self._data(f"/languages/{_seg(language_id)}", options=options)

    # --- search ---
    def search_series(self, query: Mapping[str, Any], options: RequestOptions | None = None) -> Any:
        """GET /search/series by ``name``, ``imdbId``, ``zap2itId`` or ``slug``."""
        return self._data("/search/series", params=query, options=options)

    def search_series_params(self, options: RequestOptions | None = None) -> Any:
        return self._data("/search/series/params", options=options)

    # --- series ---
    def get_series(self, series_id: int | str, options: RequestOptions | None = None) -> Any:
        return self._data(f"/series/{_seg(series_id)}", options=options)

    def head_series(self, series_id: int | str, options: RequestOptions | None = None) -> httpx.Headers | httpx.Response:
        r = self._send("HEAD", f"/series/{_seg(series_id)}", options=options)
        return r if self._full_response(options) else r.headers

    def get_series_actors(self, series_id: int | str, options: RequestOptions | None = None) -> Any:
        return self._data(f"/series/{_seg(series_id)}/actors", options=options)

    def get_series_episodes(self, series_id: int | str, page: int = 1,
                            options: RequestOptions | None = None) -> Any:
        return self._data(f"/series/{_seg(series_id)}/episodes", params={"page": page}, options=options)

    def query_series_episodes(self, series_id: int | str, query: Mapping[str, Any] | None = None,
                              options: RequestOptions | None = None) -> Any:
        """GET /series/{id}/episodes/query.

        Keys: ``absoluteNumber``, ``airedSeason``, ``airedEpisode``,
        ``dvdSeason``, ``dvdEpisode``, ``imdbId``, ``page``.
        """
        return self._data(f"/series/{_seg(series_id)}/episodes/query", params=query, options=options)

    def query_series_episodes_params(self, series_id: int | str, options: RequestOptions | None = None) -> Any:
        return self._data(f"/series/{_seg(series_id)}/episodes/query/params", options=options)

    def get_series_episodes_summary(self, series_id: int | str, options: RequestOptions | None = None) -> Any:
        return self._data(f"/series/{_seg(series_id)}/episodes/summary", options=options)

    def filter_series(self, series_id: int | str, keys: Iterable[str],
                      options: RequestOptions | None = None) -> Any:
        params = {"keys": ",".join(str(k) for k in keys)}
        return self._data(f"/series/{_seg(series_id)}/filter", params=params, options=options)

    def get_series_images(self, series_id: int | str, options: RequestOptions | None = None) -> Any:
        return self._data(f"/series/{_seg(series_id)}/images", options=options)

    def query_series_images(self, series_id: int | str, query: Mapping[str, Any] | None = None,
                            options: RequestOptions | None = None) -> Any:
        """GET /series/{id}/images/query by ``keyType``, ``resolution``, ``subKey``."""
        return self._data(f"/series/{_seg(series_id)}/images/query", params=query, options=options)

    def query_series_images_params(self, series_id: int | str, options: RequestOptions | None = None) -> Any:
        return self._data(f"/series/{_seg(series_id)}/images/query/params", options=options)

    # --- updates ---
    def query_updated(
            self,
            from_time: datetime | int,
            to_time: datetime | int | None = None,
            options: RequestOptions | None = None,
    ) -> Any:
        params = {"fromTime": _epoch(from_time), "toTime": _epoch(to_time)}
        return self._data("/updated/query", params=params, options=options)

    def query_updated_params(self, options: RequestOptions | None = None) -> Any:
        return self._data("/updated/query/params", options=options)

    # --- episodes ---
    def get_episode(self, episode_id: int | str, options: RequestOptions | None = None) -> Any:
        return self._data(f"/episodes/{_seg(episode_id)}", options=options)
