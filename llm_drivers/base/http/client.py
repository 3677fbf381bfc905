"""Async HTTP transport used by drivers that talk REST directly.

Purpose:
    ``FetchClient`` is the ``post(path, payload=..., reader=...)`` collaborator
    the drivers are written against. It owns one ``httpx.AsyncClient`` bound
    to a provider base URL, applies static headers plus an optional bearer
    token, and returns decoded JSON, or, when ``reader`` is given, hands
    the open streaming response to the reader and returns what it builds.

Failure semantics:
    HTTP error statuses raise ``httpx.HTTPStatusError`` and network failures
    raise the usual ``httpx`` exceptions. Nothing is wrapped or retried here;
    the caller owns retry policy.

Timeouts:
    Plain calls use ``timeout_seconds`` for every phase. Streaming calls keep
    the connect/write/pool limits but never time out between events.
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, TypeVar, Union

import httpx

from ..constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_STREAM_READ_TIMEOUT

T = TypeVar("T")

TokenProvider = Callable[[], Union[str, None, Awaitable[Optional[str]]]]


class FetchClient:
    """JSON-over-HTTP client bound to a base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        token_provider: Optional[TokenProvider] = None,
        timeout_seconds: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Create a client for ``base_url``.

        Parameters:
            base_url: Absolute URL that request paths are appended to.
            headers: Static headers sent with every request.
            token_provider: Optional callable returning a bearer token (may be
                async); invoked per request so refreshed tokens are picked up.
            timeout_seconds: Request timeout; defaults to ``DEFAULT_HTTP_TIMEOUT``.
            client: Pre-built ``httpx.AsyncClient`` (tests inject one with a
                ``MockTransport``). Its lifecycle stays with the caller.
        """
        self.base_url = base_url.rstrip("/")
        self._headers = dict(headers or {})
        self._token_provider = token_provider
        self._timeout = timeout_seconds if timeout_seconds is not None else DEFAULT_HTTP_TIMEOUT
        self._client = client
        self._owns_client = client is None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self._timeout)
        return self._client

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def _request_headers(self) -> Dict[str, str]:
        headers = dict(self._headers)
        if self._token_provider is not None:
            token = self._token_provider()
            if inspect.isawaitable(token):
                token = await token
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    async def get(self, path: str) -> Any:
        """GET ``path`` and return the decoded JSON body."""
        resp = await self._http().get(self._url(path), headers=await self._request_headers())
        resp.raise_for_status()
        return resp.json()

    async def post(
        self,
        path: str,
        *,
        payload: Any,
        reader: Optional[Callable[[httpx.Response], T]] = None,
    ) -> Union[Any, T]:
        """POST ``payload`` as JSON to ``path``.

        Without ``reader`` the decoded JSON body is returned. With ``reader``
        the response is opened in streaming mode, its status checked, and
        ``reader(response)`` returned; the reader's result owns the response
        and must close it.
        """
        http = self._http()
        headers = await self._request_headers()
        if reader is None:
            resp = await http.post(self._url(path), json=payload, headers=headers)
            resp.raise_for_status()
            return resp.json()

        request = http.build_request(
            "POST",
            self._url(path),
            json=payload,
            headers={**headers, "Accept": "text/event-stream"},
            timeout=httpx.Timeout(self._timeout, read=DEFAULT_STREAM_READ_TIMEOUT),
        )
        resp = await http.send(request, stream=True)
        if resp.is_error:
            await resp.aread()
            await resp.aclose()
            resp.raise_for_status()
        return reader(resp)

    async def aclose(self) -> None:
        """Close the owned ``httpx.AsyncClient``; injected clients are left open."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "FetchClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


__all__ = ["FetchClient", "TokenProvider"]
