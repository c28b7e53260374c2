"""
Async HTTP client used by the deck client helpers to call the backend API.
"""

import asyncio
from typing import Any

import aiohttp


class AsyncHTTPClient:
    """Async JSON client bound to an optional base URL."""

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 30,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = headers
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "AsyncHTTPClient":
        self.session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.session:
            await self.session.close()
            self.session = None

    def url(self, path: str) -> str:
        """Absolute URL for `path`; absolute URLs pass through unchanged."""
        if path.startswith(("http://", "https://")) or not self.base_url:
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    @staticmethod
    async def _prepare_request(coro_or_ctx: Any) -> Any:
        """Normalize aiohttp request result to an async context manager."""
        if asyncio.iscoroutine(coro_or_ctx):
            return await coro_or_ctx
        return coro_or_ctx

    @staticmethod
    async def _ensure_response_ok(response: Any) -> None:
        """Invoke raise_for_status, awaiting when necessary."""
        result = response.raise_for_status()
        if asyncio.iscoroutine(result):
            await result

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        if not self.session:
            raise RuntimeError("HTTP client not initialized. Use async context manager.")

        send = getattr(self.session, method)
        request_ctx = await self._prepare_request(send(self.url(path), **kwargs))
        async with request_ctx as response:
            await self._ensure_response_ok(response)
            return await response.json()

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, Any] | None = None,
    ) -> Any:
        """Perform GET request and decode the JSON body."""
        return await self._request("get", path, params=params, headers=headers)

    async def get_text(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, Any] | None = None,
    ) -> str:
        """Perform GET request and return the raw body (exports)."""
        if not self.session:
            raise RuntimeError("HTTP client not initialized. Use async context manager.")

        request_ctx = await self._prepare_request(
            self.session.get(self.url(path), params=params, headers=headers)
        )
        async with request_ctx as response:
            await self._ensure_response_ok(response)
            return await response.text()

    async def post(
        self,
        path: str,
        data: dict[str, Any] | None = None,
        headers: dict[str, Any] | None = None,
    ) -> Any:
        """Perform POST request with a JSON body."""
        return await self._request("post", path, json=data, headers=headers)

    async def put(
        self,
        path: str,
        data: dict[str, Any] | None = None,
        headers: dict[str, Any] | None = None,
    ) -> Any:
        """Perform PUT request with a JSON body."""
        return await self._request("put", path, json=data, headers=headers)

    async def patch(
        self,
        path: str,
        data: dict[str, Any] | None = None,
        headers: dict[str, Any] | None = None,
    ) -> Any:
        """Perform PATCH request with a JSON body."""
        return await self._request("patch", path, json=data, headers=headers)

    async def delete(self, path: str, headers: dict[str, Any] | None = None) -> Any:
        """Perform DELETE request."""
        return await self._request("delete", path, headers=headers)
