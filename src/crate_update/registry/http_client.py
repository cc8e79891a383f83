"""Shared async HTTP client utilities for registry lookups.

Provides a thin layer over ``httpx.AsyncClient`` with standardised
timeouts, user-agent headers, connection pooling and error handling.
Every registry client goes through this module so that HTTP behaviour is
consistent and testable.

Unlike a best-effort fetch, failures are never turned into empty results:
every HTTP, timeout or decoding problem is raised as ``RegistryError`` so
the caller can exclude exactly the affected dependency.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from crate_update.config import DEFAULT_CONCURRENCY, DEFAULT_TIMEOUT, USER_AGENT
from crate_update.exceptions import RegistryError

logger = logging.getLogger(__name__)


def create_client(
    *,
    user_agent: str = USER_AGENT,
    timeout: float = DEFAULT_TIMEOUT,
    max_connections: int = DEFAULT_CONCURRENCY,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build a pooled client meant to be shared by all concurrent lookups.

    Args:
        user_agent: Value of the ``User-Agent`` header.
        timeout: Per-phase httpx timeout in seconds.
        max_connections: Connection pool size; matches lookup concurrency.
        transport: Optional transport override (used by tests).

    Returns:
        An ``httpx.AsyncClient``. The caller owns it and must close it.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": user_agent, "Accept": "application/json"},
        follow_redirects=True,
        limits=httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_connections,
        ),
        transport=transport,
    )


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    name: str,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:  # noqa: ANN401
    """GET *url* once and decode the body as JSON.

    Args:
        client: Shared client to issue the request with.
        url: The URL to fetch.
        name: Dependency the request is made for; attached to errors.
        timeout: Overall deadline for the request in seconds.

    Returns:
        The decoded JSON document.

    Raises:
        RegistryError: On timeouts, transport errors, non-2xx statuses or
            bodies that are not JSON.
    """
    try:
        async with asyncio.timeout(timeout):
            resp = await client.get(url)
        resp.raise_for_status()
        return resp.json()
    except (TimeoutError, httpx.TimeoutException) as exc:
        logger.debug("Timeout fetching %s", url)
        raise RegistryError(name, f"timed out after {timeout:g}s") from exc
    except httpx.HTTPStatusError as exc:
        logger.debug("HTTP %d from %s", exc.response.status_code, url)
        raise RegistryError(name, f"HTTP {exc.response.status_code} from {url}") from exc
    except httpx.RequestError as exc:
        logger.debug("Request error for %s: %s", url, exc)
        raise RegistryError(name, f"request failed: {exc!r}") from exc
    except ValueError as exc:
        raise RegistryError(name, f"invalid JSON from {url}") from exc
