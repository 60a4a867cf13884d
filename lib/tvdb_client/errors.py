from __future__ import annotations

import httpx


class TvdbClientError(Exception):
    """Base client error."""


class AuthError(TvdbClientError):
    """Login answered 2xx without a usable token."""


def describe_http_error(exc: Exception) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        r = exc.response
        msg = f"{exc.request.method} {exc.request.url.path} failed with {r.status_code}"
        try:
            data = r.json()
        except Exception:
            return msg
        if isinstance(data, dict) and data.get("Error"):
            return f"{msg}: {data['Error']}"
        return msg
    if isinstance(exc, httpx.RequestError):
        return f"Network error: {exc}"
    return str(exc)
