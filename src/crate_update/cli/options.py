"""Options and helpers shared by the ``update`` and ``check`` commands."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from crate_update.config import (
    DEFAULT_CHANNEL_CAPACITY,
    DEFAULT_CONCURRENCY,
    DEFAULT_MANIFEST,
    DEFAULT_REGISTRY_URL,
    DEFAULT_TIMEOUT,
    UpdaterConfig,
)
from crate_update.core.manifest import DeclaredDependency, load
from crate_update.core.resolution import (
    ResolutionEngine,
    ResolutionReport,
    VersionComparison,
)
from crate_update.exceptions import ConfigError, ManifestError
from crate_update.registry import CratesIoClient

_SHARED_OPTIONS: list[Callable[[Callable[..., Any]], Callable[..., Any]]] = [
    click.argument(
        "manifest",
        default=DEFAULT_MANIFEST,
        type=click.Path(dir_okay=False),
    ),
    click.option(
        "--concurrency", "-j",
        type=click.IntRange(min=1),
        default=DEFAULT_CONCURRENCY,
        show_default=True,
        envvar="CRATE_UPDATE_CONCURRENCY",
        help="Maximum registry lookups in flight.",
    ),
    click.option(
        "--channel-capacity",
        type=click.IntRange(min=1),
        default=DEFAULT_CHANNEL_CAPACITY,
        show_default=True,
        envvar="CRATE_UPDATE_CHANNEL_CAPACITY",
        help="Size of the bounded result queue.",
    ),
    click.option(
        "--timeout",
        type=click.FloatRange(min=0, min_open=True),
        default=DEFAULT_TIMEOUT,
        show_default=True,
        envvar="CRATE_UPDATE_TIMEOUT",
        help="Per-lookup timeout in seconds.",
    ),
    click.option(
        "--registry-url",
        default=DEFAULT_REGISTRY_URL,
        show_default=True,
        envvar="CRATE_UPDATE_REGISTRY_URL",
        help="Base URL of the crates API.",
    ),
    click.option(
        "--semver/--exact",
        default=False,
        help="Compare versions numerically instead of as plain strings.",
    ),
    click.option("--verbose", "-v", is_flag=True, help="Enable debug logging."),
]


def resolution_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the manifest argument and resolution options to a command."""
    for option in reversed(_SHARED_OPTIONS):
        func = option(func)
    return func


def build_config(**settings: Any) -> UpdaterConfig:
    """Validate command-line settings, reporting bad values as a usage error."""
    try:
        return UpdaterConfig(**settings)
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc


def load_or_exit(manifest: str) -> list[DeclaredDependency]:
    """Load the manifest, or print the error and exit with status 1."""
    try:
        return load(Path(manifest))
    except ManifestError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


async def resolve_manifest(
    declared: list[DeclaredDependency],
    config: UpdaterConfig,
    comparison: VersionComparison,
) -> ResolutionReport:
    """Resolve *declared* against the configured registry, sorted by name."""
    async with CratesIoClient(
        registry_url=config.registry_url,
        user_agent=config.user_agent,
        timeout=config.timeout,
        max_connections=config.concurrency,
    ) as registry:
        engine = ResolutionEngine(
            registry,
            concurrency=config.concurrency,
            channel_capacity=config.channel_capacity,
            comparison=comparison,
            sort_by_name=True,
        )
        return await engine.resolve(declared)


def comparison_for(semver: bool) -> VersionComparison:
    return VersionComparison.SEMVER if semver else VersionComparison.EXACT
