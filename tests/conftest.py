"""Shared fixtures for crate-update tests."""

from __future__ import annotations

import asyncio
import pathlib
from typing import Any

import pytest

from crate_update.exceptions import RegistryError
from crate_update.registry.base import RegistryClient


class FakeRegistry(RegistryClient):
    """In-memory registry with per-crate delays and failures.

    Crates missing from *versions* fail like an HTTP 404 would. Tracks how
    many lookups run at the same time.
    """

    def __init__(
        self,
        versions: dict[str, str],
        *,
        errors: dict[str, BaseException] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.versions = versions
        self.errors = errors or {}
        self.delays = delays or {}
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    @property
    def registry_name(self) -> str:
        return "fake"

    async def latest_version(self, name: str) -> str:
        self.calls.append(name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(name, 0))
            if name in self.errors:
                raise self.errors[name]
            if name not in self.versions:
                raise RegistryError(name, "HTTP 404")
            return self.versions[name]
        finally:
            self.in_flight -= 1

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def make_registry() -> Any:
    """Factory for ``FakeRegistry`` instances."""
    return FakeRegistry


@pytest.fixture
def write_manifest(tmp_path: pathlib.Path) -> Any:
    """Write TOML text to ``<tmp>/Cargo.toml`` and return its path."""

    def _write(text: str) -> pathlib.Path:
        path = tmp_path / "Cargo.toml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
