"""Tests for HTTP client utility module."""

from typing import Any
from unittest.mock import AsyncMock, patch

import aiohttp
import pytest

from shared.http_client import AsyncHTTPClient


class TestAsyncHTTPClient:
    """Test HTTP client functionality."""

    @pytest.mark.asyncio
    async def test_context_manager(self) -> None:
        """Test HTTP client as async context manager."""
        async with AsyncHTTPClient() as client:
            assert client.session is not None
        assert client.session is None

    def test_url_joining(self) -> None:
        """Relative paths are joined to the base URL, absolute ones pass through."""
        client = AsyncHTTPClient(base_url="http://localhost:8000/api/")
        assert client.url("/slides") == "http://localhost:8000/api/slides"
        assert client.url("share") == "http://localhost:8000/api/share"
        assert client.url("https://other.example/x") == "https://other.example/x"
        assert AsyncHTTPClient().url("/slides") == "/slides"

    @pytest.mark.asyncio
    async def test_get_request_with_params(self) -> None:
        """Test GET request functionality."""
        mock_response_data: list[dict[str, Any]] = [{"id": "c1"}]

        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session = AsyncMock()
            mock_response = AsyncMock()
            mock_response.json.return_value = mock_response_data
            mock_response.raise_for_status.return_value = None
            mock_session.get.return_value.__aenter__.return_value = mock_response
            mock_session_class.return_value = mock_session

            async with AsyncHTTPClient(base_url="https://api.example.com") as client:
                result = await client.get("/comments", params={"slideId": "s1"})
                assert result == mock_response_data
                mock_session.get.assert_called_once_with(
                    "https://api.example.com/comments", params={"slideId": "s1"}, headers=None
                )

    @pytest.mark.asyncio
    async def test_get_text(self) -> None:
        """Raw bodies are returned for exports."""
        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session = AsyncMock()
            mock_response = AsyncMock()
            mock_response.text.return_value = "a,b\r\n1,2\r\n"
            mock_response.raise_for_status.return_value = None
            mock_session.get.return_value.__aenter__.return_value = mock_response
            mock_session_class.return_value = mock_session

            async with AsyncHTTPClient() as client:
                assert await client.get_text("https://api.example.com/export") == "a,b\r\n1,2\r\n"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["post", "put", "patch"])
    async def test_json_body_requests(self, method: str) -> None:
        """POST, PUT and PATCH send the payload as JSON."""
        mock_response_data: dict[str, Any] = {"ok": True}
        payload: dict[str, Any] = {"id": "abc", "action": "disable"}

        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session = AsyncMock()
            mock_response = AsyncMock()
            mock_response.json.return_value = mock_response_data
            mock_response.raise_for_status.return_value = None
            getattr(mock_session, method).return_value.__aenter__.return_value = mock_response
            mock_session_class.return_value = mock_session

            async with AsyncHTTPClient() as client:
                result = await getattr(client, method)("https://api.example.com/share", data=payload)
                assert result == mock_response_data
                getattr(mock_session, method).assert_called_once_with(
                    "https://api.example.com/share", json=payload, headers=None
                )

    @pytest.mark.asyncio
    async def test_delete_request(self) -> None:
        """Test DELETE request functionality."""
        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session = AsyncMock()
            mock_response = AsyncMock()
            mock_response.json.return_value = {"ok": True}
            mock_response.raise_for_status.return_value = None
            mock_session.delete.return_value.__aenter__.return_value = mock_response
            mock_session_class.return_value = mock_session

            async with AsyncHTTPClient() as client:
                assert await client.delete("https://api.example.com/comments") == {"ok": True}
                mock_session.delete.assert_called_once_with(
                    "https://api.example.com/comments", headers=None
                )

    @pytest.mark.asyncio
    async def test_not_initialized_error(self) -> None:
        """Test error when client not used as context manager."""
        client = AsyncHTTPClient()
        with pytest.raises(RuntimeError, match="HTTP client not initialized"):
            await client.get("https://api.example.com/test")
        with pytest.raises(RuntimeError, match="HTTP client not initialized"):
            await client.get_text("https://api.example.com/test")

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        """Test HTTP error status handling."""
        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session = AsyncMock()
            mock_response = AsyncMock()
            mock_response.raise_for_status.side_effect = aiohttp.ClientResponseError(
                request_info=AsyncMock(), history=(), status=404
            )
            mock_session.get.return_value.__aenter__.return_value = mock_response
            mock_session_class.return_value = mock_session

            async with AsyncHTTPClient() as client:
                with pytest.raises(aiohttp.ClientResponseError):
                    await client.get("https://api.example.com/notfound")
