"""``crate-update update [MANIFEST]`` — Bring dependencies up to date.

Loads the manifest's ``[dependencies]``, resolves every crate against the
registry concurrently, prints the crates queued for update and then runs
``cargo add <name>@<version>`` for each, one result line per crate.

Exit Codes:
    0 — Manifest processed (individual lookups or updates may have failed;
        each failure is reported on its own line).
    1 — Manifest could not be read or has no dependencies table.
    2 — Invalid option value.
"""

from __future__ import annotations

import asyncio
import sys

import click

from crate_update.cli.options import (
    build_config,
    comparison_for,
    load_or_exit,
    resolution_options,
    resolve_manifest,
)
from crate_update.cli.output import print_apply_summary, print_failures, print_queued
from crate_update.config import DEFAULT_CARGO
from crate_update.core.applier import CargoApplier
from crate_update.log import configure_logging


@click.command("update")
@resolution_options
@click.option(
    "--cargo",
    default=DEFAULT_CARGO,
    show_default=True,
    envvar="CRATE_UPDATE_CARGO",
    help="Cargo executable used to apply updates.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the cargo commands instead of running them.",
)
def update_command(
    manifest: str,
    concurrency: int,
    channel_capacity: int,
    timeout: float,
    registry_url: str,
    semver: bool,
    verbose: bool,
    cargo: str,
    dry_run: bool,
) -> None:
    """Update every outdated dependency in MANIFEST (default ./Cargo.toml).

    Examples:

        crate-update update

        crate-update update path/to/Cargo.toml --concurrency 4

        crate-update update --dry-run
    """
    configure_logging(verbose)
    config = build_config(
        registry_url=registry_url,
        timeout=timeout,
        concurrency=concurrency,
        channel_capacity=channel_capacity,
        cargo=cargo,
    )
    declared = load_or_exit(manifest)
    report = asyncio.run(resolve_manifest(declared, config, comparison_for(semver)))

    print_failures(report)
    print_queued(report.candidates)

    applier = CargoApplier(cargo=config.cargo, manifest_path=manifest)
    if dry_run:
        for candidate in report.candidates:
            click.echo("would run: " + " ".join(applier.command(candidate)))
        sys.exit(0)

    summary = applier.apply_all(report.candidates)
    print_apply_summary(summary)
    sys.exit(0)
