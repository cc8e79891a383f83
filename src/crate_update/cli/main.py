"""crate-update CLI — Keep Cargo dependencies on their latest stable release.

Entry point for the ``crate-update`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    update — Resolve outdated dependencies and apply them with cargo add.
    check  — Resolve and list outdated dependencies without changing anything.

Usage::

    crate-update update                        # ./Cargo.toml
    crate-update update path/to/Cargo.toml
    crate-update check --format json
"""

from __future__ import annotations

import click

from crate_update import __version__
from crate_update.cli.check_cmd import check_command
from crate_update.cli.update_cmd import update_command


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """crate-update: Concurrent latest-version updates for Cargo manifests.

    Looks up every dependency on crates.io in parallel and moves the
    outdated ones to their latest stable version.
    """


cli.add_command(update_command)
cli.add_command(check_command)
