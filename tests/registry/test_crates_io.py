"""Tests for CratesIoClient — all HTTP traffic served by httpx.MockTransport."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from crate_update.config import USER_AGENT
from crate_update.core.manifest import DeclaredDependency
from crate_update.exceptions import RegistryError
from crate_update.registry import CratesIoClient, ResolvedDependency


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _client_for(handler: Any, **kwargs: Any) -> CratesIoClient:
    """Build a CratesIoClient whose requests go to *handler*."""
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        headers={"User-Agent": USER_AGENT},
    )
    return CratesIoClient(client=http, **kwargs)


def _crate_body(version: Any) -> dict[str, Any]:
    return {"crate": {"id": "serde", "max_stable_version": version, "max_version": "9.9.9-beta"}}


def _latest(client: CratesIoClient, name: str) -> str:
    async def go() -> str:
        async with client:
            return await client.latest_version(name)

    return asyncio.run(go())


# ---------------------------------------------------------------------------
# Success path
# ---------------------------------------------------------------------------


class TestLatestVersion:
    """Reads crate.max_stable_version from the crates API."""

    def test_returns_max_stable_version(self) -> None:
        client = _client_for(lambda req: httpx.Response(200, json=_crate_body("1.0.190")))
        assert _latest(client, "serde") == "1.0.190"

    def test_requests_crate_endpoint(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_crate_body("1.32.0"))

        _latest(_client_for(handler), "tokio")
        assert str(seen[0].url) == "https://crates.io/api/v1/crates/tokio"
        assert seen[0].method == "GET"
        assert seen[0].headers["User-Agent"] == USER_AGENT

    def test_custom_registry_url(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json=_crate_body("0.1.0"))

        client = _client_for(handler, registry_url="https://mirror.example/api/v1/crates/")
        _latest(client, "foo")
        assert seen == ["https://mirror.example/api/v1/crates/foo"]

    def test_resolve_carries_features(self) -> None:
        client = _client_for(lambda req: httpx.Response(200, json=_crate_body("1.32.0")))

        async def go() -> ResolvedDependency:
            async with client:
                return await client.resolve(DeclaredDependency("tokio", "1.0", ("rt",)))

        assert asyncio.run(go()) == ResolvedDependency("tokio", "1.32.0", ("rt",))

    def test_resolve_latest_alias(self) -> None:
        client = _client_for(lambda req: httpx.Response(200, json=_crate_body("2.0.0")))

        async def go() -> str:
            async with client:
                return await client.resolve_latest("serde")

        assert asyncio.run(go()) == "2.0.0"

    def test_registry_name(self) -> None:
        client = _client_for(lambda req: httpx.Response(200))
        assert client.registry_name == "crates.io"


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    """Every failure mode surfaces as RegistryError naming the crate."""

    def test_not_found(self) -> None:
        client = _client_for(lambda req: httpx.Response(404, json={"errors": []}))
        with pytest.raises(RegistryError) as info:
            _latest(client, "no-such-crate")
        assert info.value.name == "no-such-crate"
        assert "404" in info.value.cause

    def test_server_error(self) -> None:
        client = _client_for(lambda req: httpx.Response(503))
        with pytest.raises(RegistryError, match="503"):
            _latest(client, "serde")

    def test_invalid_json(self) -> None:
        client = _client_for(lambda req: httpx.Response(200, text="<html>"))
        with pytest.raises(RegistryError, match="invalid JSON"):
            _latest(client, "serde")

    @pytest.mark.parametrize(
        "body",
        [
            [],
            {},
            {"crate": "serde"},
            {"crate": {}},
            _crate_body(None),
            _crate_body(190),
            _crate_body(""),
        ],
    )
    def test_shape_mismatch(self, body: Any) -> None:
        client = _client_for(lambda req: httpx.Response(200, json=body))
        with pytest.raises(RegistryError):
            _latest(client, "serde")

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RegistryError, match="request failed"):
            _latest(_client_for(handler), "serde")

    def test_timeout(self) -> None:
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(1)
            return httpx.Response(200, json=_crate_body("1.0.0"))

        with pytest.raises(RegistryError, match="timed out"):
            _latest(_client_for(handler, timeout=0.05), "serde")


# ---------------------------------------------------------------------------
# Client lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    """Owned clients are closed on exit; injected ones are left open."""

    def test_injected_client_left_open(self) -> None:
        http = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda req: httpx.Response(200, json=_crate_body("1")))
        )
        registry = CratesIoClient(client=http)

        async def go() -> None:
            async with registry:
                await registry.latest_version("serde")

        asyncio.run(go())
        assert not http.is_closed

    def test_owned_client_closed(self) -> None:
        registry = CratesIoClient()

        async def go() -> None:
            async with registry:
                pass

        asyncio.run(go())
        assert registry._client.is_closed

    def test_shared_client_serves_concurrent_lookups(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            name = request.url.path.rsplit("/", 1)[-1]
            return httpx.Response(200, json=_crate_body(f"1.0.{len(name)}"))

        client = _client_for(handler)

        async def go() -> list[str]:
            async with client:
                return await asyncio.gather(
                    *(client.latest_version(n) for n in ("a", "bb", "ccc"))
                )

        assert asyncio.run(go()) == ["1.0.1", "1.0.2", "1.0.3"]
