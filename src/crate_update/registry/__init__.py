"""Registry lookups for the latest stable version of a crate.

Public API::

    from crate_update.registry import RegistryClient, ResolvedDependency
    from crate_update.registry.crates_io import CratesIoClient
"""

from __future__ import annotations

from crate_update.registry.base import RegistryClient, ResolvedDependency
from crate_update.registry.crates_io import CratesIoClient

__all__ = [
    "CratesIoClient",
    "RegistryClient",
    "ResolvedDependency",
]
