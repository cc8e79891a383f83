"""Tests for the shared HTTP helpers."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from crate_update.config import USER_AGENT
from crate_update.exceptions import RegistryError
from crate_update.registry.http_client import create_client, fetch_json


class TestCreateClient:
    def test_sets_user_agent(self) -> None:
        client = create_client()
        try:
            assert client.headers["User-Agent"] == USER_AGENT
        finally:
            asyncio.run(client.aclose())

    def test_custom_user_agent(self) -> None:
        client = create_client(user_agent="custom/1.0")
        try:
            assert client.headers["User-Agent"] == "custom/1.0"
        finally:
            asyncio.run(client.aclose())


class TestFetchJson:
    def _fetch(self, handler, **kwargs):
        async def go():
            async with create_client(transport=httpx.MockTransport(handler)) as client:
                return await fetch_json(client, "https://example.test/x", name="x", **kwargs)

        return asyncio.run(go())

    def test_decodes_json(self) -> None:
        assert self._fetch(lambda req: httpx.Response(200, json={"a": 1})) == {"a": 1}

    def test_status_error_names_dependency(self) -> None:
        with pytest.raises(RegistryError) as info:
            self._fetch(lambda req: httpx.Response(500))
        assert info.value.name == "x"
        assert "HTTP 500" in str(info.value)

    def test_redirect_followed(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/x":
                return httpx.Response(301, headers={"Location": "https://example.test/y"})
            return httpx.Response(200, json={"moved": True})

        assert self._fetch(handler) == {"moved": True}
