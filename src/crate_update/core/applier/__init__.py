"""Apply update candidates through the Cargo package manager."""

from __future__ import annotations

from crate_update.core.applier.applier import (
    Applied,
    ApplyOutcome,
    ApplySummary,
    CargoApplier,
)

__all__ = [
    "Applied",
    "ApplyOutcome",
    "ApplySummary",
    "CargoApplier",
]
