from __future__ import annotations

from typing import Any

import httpx

from .base import RequestOptions


class HttpxResponse:
    """Adapts an `httpx.Response` to the transport response protocol."""

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def ok(self) -> bool:
        return self._response.is_success

    @property
    def status(self) -> int:
        return self._response.status_code

    async def json(self) -> Any:
        return self._response.json()


class HttpxTransport:
    """
    Default transport: one `httpx.AsyncClient` shared by every call.

    The client is created lazily on first use, unless one is passed in.
    Network errors (`httpx.HTTPError`) are not wrapped.
    """

    def __init__(
        self,
        *,
        timeout_s: float = 60.0,
        verify_ssl: bool = True,
        default_headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.timeout_s = timeout_s
        self.verify_ssl = verify_ssl
        self.default_headers = default_headers or {}
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout_s, verify=self.verify_ssl)
        return self._client

    async def __call__(self, url: str, options: RequestOptions) -> HttpxResponse:
        headers = {**self.default_headers, **options["headers"]}
        resp = await self._get_client().request(
            options["method"],
            url,
            headers=headers,
            content=options["body"],
        )
        return HttpxResponse(resp)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
