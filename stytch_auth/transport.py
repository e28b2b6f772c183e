"""
Default httpx transports.

Each call performs one request and returns the raw status and body. httpx
exceptions propagate unchanged; the pipeline turns them into
``RequestFailure``.
"""

from typing import Any, Optional

import httpx

from .types import OutboundRequest, RawResponse


class HttpxTransport:
    """Synchronous transport backed by ``httpx.Client``."""

    def __init__(self, agent: Optional[httpx.BaseTransport] = None) -> None:
        self._agent = agent
        self._http_client: Optional[httpx.Client] = None

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.Client(transport=self._agent)
        return self._http_client

    def __call__(self, request: OutboundRequest) -> RawResponse:
        response = self._get_client().request(
            method=request.method,
            url=request.url,
            headers=request.headers,
            content=request.content,
            timeout=request.timeout,
        )
        return RawResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class AsyncHttpxTransport:
    """Asynchronous transport backed by ``httpx.AsyncClient``."""

    def __init__(self, agent: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._agent = agent
        self._http_client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(transport=self._agent)
        return self._http_client

    async def __call__(self, request: OutboundRequest) -> RawResponse:
        response = await self._get_client().request(
            method=request.method,
            url=request.url,
            headers=request.headers,
            content=request.content,
            timeout=request.timeout,
        )
        return RawResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "AsyncHttpxTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
