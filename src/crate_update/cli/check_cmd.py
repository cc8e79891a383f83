"""``crate-update check [MANIFEST]`` — List outdated dependencies.

Resolves the manifest exactly like ``update`` but never runs cargo.

Exit Codes:
    0 — Manifest processed.
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
from crate_update.cli.output import print_check_table, print_failures, print_json
from crate_update.log import configure_logging


@click.command("check")
@resolution_options
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def check_command(
    manifest: str,
    concurrency: int,
    channel_capacity: int,
    timeout: float,
    registry_url: str,
    semver: bool,
    verbose: bool,
    output_format: str,
) -> None:
    """Show which dependencies in MANIFEST have a newer stable release.

    Examples:

        crate-update check

        crate-update check path/to/Cargo.toml --format json
    """
    configure_logging(verbose)
    config = build_config(
        registry_url=registry_url,
        timeout=timeout,
        concurrency=concurrency,
        channel_capacity=channel_capacity,
    )
    declared = load_or_exit(manifest)
    report = asyncio.run(resolve_manifest(declared, config, comparison_for(semver)))

    if output_format == "json":
        print_json(report.to_dict())
    else:
        print_failures(report)
        print_check_table(report)
    sys.exit(0)
