"""Concurrent resolution of declared dependencies to their latest versions.

Public API::

    from crate_update.core.resolution import ResolutionEngine, UpdateCandidate
"""

from __future__ import annotations

from crate_update.core.resolution.engine import ResolutionEngine
from crate_update.core.resolution.models import (
    ResolutionFailure,
    ResolutionReport,
    UpdateCandidate,
)
from crate_update.core.resolution.versions import (
    VersionComparison,
    is_changed,
    parse_plain_version,
)

__all__ = [
    "ResolutionEngine",
    "ResolutionFailure",
    "ResolutionReport",
    "UpdateCandidate",
    "VersionComparison",
    "is_changed",
    "parse_plain_version",
]
