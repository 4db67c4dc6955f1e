# src/ikigai_planner/api/http.py

"""
Thin JSON-over-HTTP client for the planner service.

- one httpx.AsyncClient per process (connection pooling), closed on shutdown,
- bearer token attached to every request once known,
- {"success": ..., "data": X} envelopes are unwrapped to X,
- every failure surfaces as ApiError (HTTP status + decoded body when present).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from ..core.errors import ApiError

logger = logging.getLogger(__name__)


def make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    # keep read >= connect as a sane baseline
    read_s = max(read_s, connect_s)
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


def _decode_body(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return None


def unwrap(body: Any) -> Any:
    if isinstance(body, Mapping) and "data" in body:
        return body["data"]
    return body


class ApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: httpx.Timeout | float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._token: str | None = token or None
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else make_timeout(5.0, 15.0),
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings, *, token: str | None = None) -> ApiClient:
        timeout = make_timeout(
            float(getattr(settings, "connect_timeout_seconds", 5.0)),
            float(getattr(settings, "read_timeout_seconds", 15.0)),
        )
        return cls(str(settings.api_url), token=token, timeout=timeout)

    # ---- token ----

    @property
    def token(self) -> str | None:
        return self._token

    @token.setter
    def token(self, value: str | None) -> None:
        self._token = value or None

    def _headers(self) -> dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    # ---- requests ----

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        clean_params = {k: v for k, v in (params or {}).items() if v is not None} or None
        try:
            resp = await self._client.request(
                method,
                path,
                json=json,
                params=clean_params,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            logger.info("HTTP %s %s failed: %s", method, path, e.__class__.__name__)
            raise ApiError(f"Network error: {e.__class__.__name__}") from e

        body = _decode_body(resp)
        if resp.is_error:
            err = ApiError(
                f"HTTP {resp.status_code} on {method} {path}",
                status=resp.status_code,
                payload=body,
            )
            logger.info("HTTP %s %s -> %s (%s)", method, path, resp.status_code, err.server_message)
            raise err

        return body

    async def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return unwrap(await self.request("GET", path, params=params))

    async def post(self, path: str, json: Any = None) -> Any:
        return unwrap(await self.request("POST", path, json=json))

    async def put(self, path: str, json: Any = None) -> Any:
        return unwrap(await self.request("PUT", path, json=json))

    async def delete(self, path: str) -> Any:
        return unwrap(await self.request("DELETE", path))

    async def aclose(self) -> None:
        await self._client.aclose()
