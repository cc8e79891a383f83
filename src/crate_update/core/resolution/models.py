"""Resolution data models: update candidates and the per-run report.

Pure data holders produced by ``ResolutionEngine``. ``UpdateCandidate`` is
the only type the applier accepts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from crate_update.core.manifest import DeclaredDependency
from crate_update.registry.base import ResolvedDependency


@dataclass(frozen=True)
class UpdateCandidate:
    """A dependency whose latest stable version differs from its declaration.

    Attributes:
        name: Crate name.
        declared_constraint: Version requirement from the manifest.
        resolved_version: Latest stable version to move to.
        features: Features from the manifest, in declaration order.
    """

    name: str
    declared_constraint: str
    resolved_version: str
    features: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_resolution(
        cls, declared: DeclaredDependency, resolved: ResolvedDependency
    ) -> UpdateCandidate:
        return cls(
            name=resolved.name,
            declared_constraint=declared.constraint,
            resolved_version=resolved.resolved_version,
            features=resolved.features,
        )

    @property
    def spec(self) -> str:
        """``name@version`` as accepted by ``cargo add``."""
        return f"{self.name}@{self.resolved_version}"

    @property
    def features_arg(self) -> str:
        """Comma-joined feature list, empty when there are no features."""
        return ",".join(self.features)


@dataclass(frozen=True)
class ResolutionFailure:
    """A dependency whose latest version could not be determined.

    Attributes:
        name: Crate name.
        reason: Description of what went wrong.
    """

    name: str
    reason: str


@dataclass
class ResolutionReport:
    """Outcome of one engine run over a manifest's dependencies.

    Attributes:
        candidates: Dependencies with a different latest version.
        unchanged: Names whose latest version equals the declaration.
        failures: Lookups that failed; excluded from ``candidates``.
    """

    candidates: list[UpdateCandidate] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    failures: list[ResolutionFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of dependencies that were looked up."""
        return len(self.candidates) + len(self.unchanged) + len(self.failures)

    def sort_by_name(self) -> None:
        """Reorder every list by crate name, in place."""
        self.candidates.sort(key=lambda c: c.name)
        self.unchanged.sort()
        self.failures.sort(key=lambda f: f.name)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the report to a JSON-compatible dict."""
        return {
            "total": self.total,
            "candidates": [
                {
                    "name": c.name,
                    "declared": c.declared_constraint,
                    "latest": c.resolved_version,
                    "features": list(c.features),
                }
                for c in self.candidates
            ],
            "unchanged": list(self.unchanged),
            "failures": [{"name": f.name, "reason": f.reason} for f in self.failures],
        }
