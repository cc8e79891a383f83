"""Concurrent latest-version resolution across a manifest's dependencies.

Every declared dependency gets its own task in an ``asyncio.TaskGroup``.
Tasks take a slot from a semaphore only while the registry lookup is in
flight, then report exactly one outcome through a bounded queue. A single
collector task, running in the same group, drains exactly one outcome per
dependency and sorts each into the report.

Queue guarantee: the collector consumes concurrently with the producers,
so a full queue only parks a producer until the collector's next ``get``.
Combined with the semaphore, neither memory nor open connections grow
with the size of the manifest.

A failed lookup is logged and recorded for that dependency alone; it never
cancels its siblings, and the engine itself never raises for it. The task
group guarantees that no lookup outlives the call.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from crate_update.config import DEFAULT_CHANNEL_CAPACITY, DEFAULT_CONCURRENCY
from crate_update.core.manifest import DeclaredDependency
from crate_update.core.resolution.models import (
    ResolutionFailure,
    ResolutionReport,
    UpdateCandidate,
)
from crate_update.core.resolution.versions import VersionComparison, is_changed
from crate_update.exceptions import RegistryError
from crate_update.registry.base import RegistryClient, ResolvedDependency

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Outcome:
    """What one lookup task sends to the collector."""

    declared: DeclaredDependency
    resolved: ResolvedDependency | None = None
    error: str = ""


class ResolutionEngine:
    """Resolve many dependencies concurrently and keep the changed ones.

    Args:
        registry: Client used for every lookup. It must already be open
            (entered as an async context manager) for the duration of the
            call.
        concurrency: Maximum number of lookups in flight at once.
        channel_capacity: Size of the bounded completion queue.
        comparison: Policy deciding whether a resolved version is a change.
        sort_by_name: Sort the report by crate name after collection.
            Otherwise results appear in completion order.
    """

    def __init__(
        self,
        registry: RegistryClient,
        *,
        concurrency: int = DEFAULT_CONCURRENCY,
        channel_capacity: int = DEFAULT_CHANNEL_CAPACITY,
        comparison: VersionComparison = VersionComparison.EXACT,
        sort_by_name: bool = False,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        if channel_capacity < 1:
            raise ValueError(
                f"channel_capacity must be at least 1, got {channel_capacity}"
            )
        self.registry = registry
        self.concurrency = concurrency
        self.channel_capacity = channel_capacity
        self.comparison = comparison
        self.sort_by_name = sort_by_name

    async def resolve(self, declared: Sequence[DeclaredDependency]) -> ResolutionReport:
        """Look up every dependency and classify the results.

        Args:
            declared: Dependencies from the manifest. Later entries that
                repeat an earlier name are ignored.

        Returns:
            A report of candidates, unchanged names and failures. Returns
            only once every lookup has finished.
        """
        deps = _unique_by_name(declared)
        report = ResolutionReport()
        if not deps:
            return report

        queue: asyncio.Queue[_Outcome] = asyncio.Queue(maxsize=self.channel_capacity)
        semaphore = asyncio.Semaphore(self.concurrency)

        async with asyncio.TaskGroup() as group:
            group.create_task(self._collect(queue, len(deps), report))
            for dep in deps:
                group.create_task(
                    self._lookup(dep, semaphore, queue), name=f"resolve:{dep.name}"
                )

        if self.sort_by_name:
            report.sort_by_name()
        logger.info(
            "Resolved %d dependencies: %d outdated, %d up to date, %d failed",
            report.total,
            len(report.candidates),
            len(report.unchanged),
            len(report.failures),
        )
        return report

    async def resolve_changed(
        self, declared: Sequence[DeclaredDependency]
    ) -> list[UpdateCandidate]:
        """Return only the dependencies whose latest version differs."""
        report = await self.resolve(declared)
        return report.candidates

    def resolve_sync(self, declared: Sequence[DeclaredDependency]) -> ResolutionReport:
        """Run ``resolve`` on a fresh event loop."""
        return asyncio.run(self.resolve(declared))

    def resolve_changed_sync(
        self, declared: Sequence[DeclaredDependency]
    ) -> list[UpdateCandidate]:
        """Run ``resolve_changed`` on a fresh event loop."""
        return asyncio.run(self.resolve_changed(declared))

    # -----------------------------------------------------------------------
    # Tasks
    # -----------------------------------------------------------------------

    async def _lookup(
        self,
        dep: DeclaredDependency,
        semaphore: asyncio.Semaphore,
        queue: asyncio.Queue[_Outcome],
    ) -> None:
        async with semaphore:
            try:
                resolved = await self.registry.resolve(dep)
            except RegistryError as exc:
                outcome = _Outcome(dep, error=exc.cause)
            except Exception as exc:
                logger.warning("Unexpected error resolving %s", dep.name, exc_info=True)
                outcome = _Outcome(dep, error=f"unexpected error: {exc!r}")
            else:
                outcome = _Outcome(dep, resolved=resolved)
        await queue.put(outcome)

    async def _collect(
        self,
        queue: asyncio.Queue[_Outcome],
        expected: int,
        report: ResolutionReport,
    ) -> None:
        for _ in range(expected):
            outcome = await queue.get()
            self._record(outcome, report)
            queue.task_done()

    def _record(self, outcome: _Outcome, report: ResolutionReport) -> None:
        dep = outcome.declared
        if outcome.resolved is None:
            logger.warning("Could not resolve latest version of %s: %s", dep.name, outcome.error)
            report.failures.append(ResolutionFailure(name=dep.name, reason=outcome.error))
            return

        latest = outcome.resolved.resolved_version
        if is_changed(dep.constraint, latest, self.comparison):
            logger.debug("%s: %r -> %s", dep.name, dep.constraint, latest)
            report.candidates.append(UpdateCandidate.from_resolution(dep, outcome.resolved))
        else:
            report.unchanged.append(dep.name)


def _unique_by_name(declared: Sequence[DeclaredDependency]) -> list[DeclaredDependency]:
    """Drop repeated names, keeping the first declaration."""
    seen: dict[str, DeclaredDependency] = {}
    for dep in declared:
        if dep.name in seen:
            logger.warning("Ignoring duplicate declaration of %s", dep.name)
            continue
        seen[dep.name] = dep
    return list(seen.values())
