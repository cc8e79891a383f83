"""Apply update candidates with ``cargo add``.

Each candidate becomes one subprocess::

    cargo add <name>@<version> [--features a,b] [--manifest-path <path>]

The subprocess's exit status alone decides success. A nonzero exit is a
normal, unsuccessful ``Applied`` result; only a process that cannot be
started at all raises ``ApplyLaunchError``.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from crate_update.config import DEFAULT_CARGO
from crate_update.core.resolution.models import UpdateCandidate
from crate_update.exceptions import ApplyLaunchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Applied:
    """Result of running the package manager for one candidate.

    Attributes:
        candidate: The update that was attempted.
        success: True when the subprocess exited with status 0.
        returncode: Raw exit status of the subprocess.
    """

    candidate: UpdateCandidate
    success: bool
    returncode: int = 0


@dataclass(frozen=True)
class ApplyOutcome:
    """One entry of a batch apply: either a result or a launch failure."""

    candidate: UpdateCandidate
    applied: Applied | None = None
    launch_error: ApplyLaunchError | None = None

    @property
    def success(self) -> bool:
        return self.applied is not None and self.applied.success


@dataclass
class ApplySummary:
    """All outcomes of a batch apply, in the order they were attempted."""

    outcomes: list[ApplyOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[UpdateCandidate]:
        return [o.candidate for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[UpdateCandidate]:
        return [o.candidate for o in self.outcomes if not o.success]


class CargoApplier:
    """Runs ``cargo add`` for update candidates.

    Args:
        cargo: Executable to invoke.
        manifest_path: When set, passed as ``--manifest-path`` so the edit
            lands in the manifest that was read.
    """

    def __init__(
        self,
        cargo: str = DEFAULT_CARGO,
        manifest_path: str | Path | None = None,
    ) -> None:
        self.cargo = cargo
        self.manifest_path = Path(manifest_path) if manifest_path is not None else None

    def command(self, candidate: UpdateCandidate) -> list[str]:
        """Build the argument vector for *candidate*."""
        cmd = [self.cargo, "add", candidate.spec]
        if candidate.features:
            cmd += ["--features", candidate.features_arg]
        if self.manifest_path is not None:
            cmd += ["--manifest-path", str(self.manifest_path)]
        return cmd

    def apply(self, candidate: UpdateCandidate) -> Applied:
        """Run the package manager for one candidate.

        Returns:
            ``Applied`` with ``success`` reflecting the exit status.

        Raises:
            ApplyLaunchError: If the subprocess could not be started.
        """
        cmd = self.command(candidate)
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, check=False)
        except OSError as exc:
            raise ApplyLaunchError(
                candidate.name, f"cannot run {self.cargo!r}: {exc}"
            ) from exc
        if proc.returncode != 0:
            logger.debug("%s exited with status %d", self.cargo, proc.returncode)
        return Applied(
            candidate=candidate,
            success=proc.returncode == 0,
            returncode=proc.returncode,
        )

    def apply_all(self, candidates: Iterable[UpdateCandidate]) -> ApplySummary:
        """Apply every candidate in turn; no failure stops the batch."""
        summary = ApplySummary()
        for candidate in candidates:
            try:
                applied = self.apply(candidate)
            except ApplyLaunchError as exc:
                logger.warning("Could not launch update of %s: %s", candidate.name, exc.cause)
                summary.outcomes.append(ApplyOutcome(candidate, launch_error=exc))
                continue
            summary.outcomes.append(ApplyOutcome(candidate, applied=applied))
        return summary
