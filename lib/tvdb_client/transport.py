from __future__ import annotations

import logging
import os
import re
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, Mapping
from urllib.parse import urlsplit

import httpx

from .config_types import ClientConfig

logger = logging.getLogger(__name__)

_DUPLICATE_SLASHES = re.compile(r"([^:]/)/+")

_PROXY_ENV = {
    "https": ("https_proxy", "HTTPS_PROXY"),
    "http": ("http_proxy", "HTTP_PROXY"),
}


@dataclass(frozen=True)
class RequestSpec:
    method: str
    url: str
    params: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    json_body: Any | None = None
    proxy: str | None = None

    def header(self, name: str) -> str | None:
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def with_header(self, name: str, value: str) -> "RequestSpec":
        headers = {k: v for k, v in self.headers.items() if k.lower() != name.lower()}
        headers[name] = value
        return replace(self, headers=headers)


Step = Callable[[RequestSpec], RequestSpec]


def is_relative_url(url: str) -> bool:
    parts = urlsplit(url)
    return not parts.scheme and not parts.netloc


def join_base_url(base_url: str, path: str) -> str:
    return _DUPLICATE_SLASHES.sub(r"\1", f"{base_url}/{path}")


def resolve_base_url(base_url: str) -> Step:
    def step(spec: RequestSpec) -> RequestSpec:
        if not is_relative_url(spec.url):
            return spec
        return replace(spec, url=join_base_url(base_url, spec.url))

    return step


def attach_token(get_token: Callable[[], str | None]) -> Step:
    def step(spec: RequestSpec) -> RequestSpec:
        token = get_token()
        if not token or spec.header("Authorization") is not None:
            return spec
        return spec.with_header("Authorization", f"Bearer {token}")

    return step


def attach_language(default_language: str | None) -> Step:
    def step(spec: RequestSpec) -> RequestSpec:
        if not default_language or spec.header("Accept-Language"):
            return spec
        return spec.with_header("Accept-Language", default_language)

    return step


def proxy_from_env(url: str, environ: Mapping[str, str] | None = None) -> str | None:
    env = os.environ if environ is None else environ
    scheme = urlsplit(url).scheme.lower()
    for name in _PROXY_ENV.get(scheme, ()):
        value = (env.get(name) or "").strip()
        if value:
            return value
    return None


def detect_proxy(spec: RequestSpec) -> RequestSpec:
    proxy = proxy_from_env(spec.url)
    if proxy is None:
        return spec
    return replace(spec, proxy=proxy)


class RequestPipeline:
    def __init__(self, steps: Iterable[Step]):
        self._steps = tuple(steps)

    def __call__(self, spec: RequestSpec) -> RequestSpec:
        for step in self._steps:
            spec = step(spec)
        return spec


def build_pipeline(cfg: ClientConfig, get_token: Callable[[], str | None]) -> RequestPipeline:
    # base URL first: proxy detection inspects the final scheme
    steps: list[Step] = [
        resolve_base_url(cfg.base_url),
        attach_token(get_token),
        attach_language(cfg.default_language),
    ]
    if cfg.should_detect_proxy:
        steps.append(detect_proxy)
    return RequestPipeline(steps)


class Transport:
    def __init__(
            self,
            cfg: ClientConfig,
            get_token: Callable[[], str | None],
            *,
            http_transport: httpx.BaseTransport | None = None,
    ):
        self._cfg = cfg
        self._pipeline = build_pipeline(cfg, get_token)
        self._http_transport = http_transport
        self._clients: dict[str | None, httpx.Client] = {}
        self._lock = threading.Lock()

    @property
    def pipeline(self) -> RequestPipeline:
        return self._pipeline

    def _client_for(self, proxy: str | None) -> httpx.Client:
        if self._http_transport is not None:
            # an injected transport owns routing; httpx would mount a proxy transport over it
            proxy = None
        with self._lock:
            client = self._clients.get(proxy)
            if client is None:
                client = httpx.Client(
                    timeout=self._cfg.timeout_s,
                    headers={"User-Agent": self._cfg.user_agent, "Accept": "application/json"},
                    proxy=proxy,
                    transport=self._http_transport,
                    trust_env=False,
                    follow_redirects=True,
                )
                self._clients[proxy] = client
            return client

    def close(self) -> None:
        with self._lock:
            clients, self._clients = self._clients, {}
        for client in clients.values():
            client.close()

    def send(self, spec: RequestSpec) -> httpx.Response:
        spec = self._pipeline(spec)
        params = {k: v for k, v in spec.params.items() if v is not None}
        r = self._client_for(spec.proxy).request(
            spec.method,
            spec.url,
            params=params or None,
            headers=dict(spec.headers),
            json=spec.json_body,
        )
        logger.debug("%s %s -> %s", spec.method, spec.url, r.status_code)
        r.raise_for_status()
        return r
