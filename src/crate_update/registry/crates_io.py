"""crates.io client: latest stable version of a crate.

Queries ``GET https://crates.io/api/v1/crates/{name}`` and reads
``crate.max_stable_version`` from the response.

Usage::

    async with CratesIoClient() as client:
        version = await client.latest_version("serde")
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from crate_update.config import (
    DEFAULT_CONCURRENCY,
    DEFAULT_REGISTRY_URL,
    DEFAULT_TIMEOUT,
    USER_AGENT,
)
from crate_update.exceptions import RegistryError
from crate_update.registry.base import RegistryClient
from crate_update.registry.http_client import create_client, fetch_json

logger = logging.getLogger(__name__)


class CratesIoClient(RegistryClient):
    """Client for the crates.io JSON API.

    Args:
        registry_url: Base crates endpoint; the crate name is appended.
        user_agent: User-Agent header for requests.
        timeout: Overall deadline for one lookup in seconds.
        max_connections: Size of the shared connection pool.
        client: Optional pre-built ``httpx.AsyncClient``. When given, it is
            used as-is and left open on exit.
    """

    def __init__(
        self,
        *,
        registry_url: str = DEFAULT_REGISTRY_URL,
        user_agent: str = USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        max_connections: int = DEFAULT_CONCURRENCY,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._registry_url = registry_url.rstrip("/")
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client if client is not None else create_client(
            user_agent=user_agent,
            timeout=timeout,
            max_connections=max_connections,
        )

    @property
    def registry_name(self) -> str:
        """Return the human-readable registry name."""
        return "crates.io"

    def crate_url(self, name: str) -> str:
        """Endpoint that describes crate *name*."""
        return f"{self._registry_url}/{name}"

    async def latest_version(self, name: str) -> str:
        """Fetch the latest stable version of *name* from the registry.

        Raises:
            RegistryError: On any transport failure or unexpected body.
        """
        url = self.crate_url(name)
        data = await fetch_json(self._client, url, name=name, timeout=self._timeout)
        version = _max_stable_version(name, data)
        logger.debug("%s latest stable version is %s", name, version)
        return version

    async def aclose(self) -> None:
        """Close the pooled client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()


def _max_stable_version(name: str, data: Any) -> str:
    """Extract ``crate.max_stable_version`` or raise ``RegistryError``."""
    if not isinstance(data, dict):
        raise RegistryError(name, f"expected a JSON object, got {type(data).__name__}")
    crate = data.get("crate")
    if not isinstance(crate, dict):
        raise RegistryError(name, "response has no 'crate' object")
    version = crate.get("max_stable_version")
    if not isinstance(version, str) or not version:
        raise RegistryError(name, "crate has no stable version")
    return version
