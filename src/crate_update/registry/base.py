"""Base class and data model for registry clients.

Defines the ``RegistryClient`` abstract base class that concrete clients
(crates.io) implement, along with the ``ResolvedDependency`` model they
produce.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import TracebackType

from crate_update.core.manifest import DeclaredDependency


@dataclass(frozen=True)
class ResolvedDependency:
    """A declared dependency paired with the registry's latest stable version.

    Attributes:
        name: Crate name.
        resolved_version: Latest stable version reported by the registry.
        features: Features carried over unchanged from the declaration.
    """

    name: str
    resolved_version: str
    features: tuple[str, ...] = field(default_factory=tuple)


class RegistryClient(ABC):
    """Abstract base class for latest-version lookups.

    Subclasses implement ``latest_version``. Clients are async context
    managers so that pooled connections are opened once per run and shared
    by every concurrent lookup. Implementations must be safe to call
    concurrently and must not retry.
    """

    @property
    @abstractmethod
    def registry_name(self) -> str:
        """Human-readable name of this registry (e.g. 'crates.io')."""

    @abstractmethod
    async def latest_version(self, name: str) -> str:
        """Return the latest stable version of *name*.

        Raises:
            RegistryError: If the version cannot be determined.
        """

    async def resolve_latest(self, name: str) -> str:
        """Alias of ``latest_version``."""
        return await self.latest_version(name)

    async def resolve(self, dep: DeclaredDependency) -> ResolvedDependency:
        """Look up *dep* and carry its features onto the result."""
        version = await self.latest_version(dep.name)
        return ResolvedDependency(
            name=dep.name, resolved_version=version, features=dep.features
        )

    async def aclose(self) -> None:
        """Release any resources held by the client."""

    async def __aenter__(self) -> RegistryClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
