"""Shared fixtures for CLI tests.

The registry and the cargo subprocess are both replaced: ``use_registry``
installs a fake registry for the command under test and ``cargo_calls``
records every cargo invocation instead of running it.
"""

from __future__ import annotations

import subprocess
from typing import Any

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def use_registry(monkeypatch, make_registry) -> Any:
    """Route the CLI's crates.io lookups to a fake registry."""

    def _install(versions: dict[str, str], **kwargs: Any):
        registry = make_registry(versions, **kwargs)
        monkeypatch.setattr(
            "crate_update.cli.options.CratesIoClient", lambda **_: registry
        )
        return registry

    return _install


@pytest.fixture
def cargo_calls(monkeypatch) -> list[list[str]]:
    """Record cargo invocations; crates named ``broken*`` exit with 101."""
    calls: list[list[str]] = []

    def run(cmd, check=False, **kwargs):
        calls.append(list(cmd))
        code = 101 if cmd[2].startswith("broken") else 0
        return subprocess.CompletedProcess(cmd, code)

    monkeypatch.setattr(subprocess, "run", run)
    return calls


@pytest.fixture
def manifest(write_manifest):
    """A manifest with one current, one outdated and one featured crate."""
    return write_manifest(
        "[package]\n"
        'name = "demo"\n'
        'version = "0.1.0"\n\n'
        "[dependencies]\n"
        'serde = "1.0.188"\n'
        'anyhow = "1.0.75"\n'
        'tokio = { version = "1.0", features = ["rt", "macros"] }\n'
    )
