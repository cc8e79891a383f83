"""Load ``[dependencies]`` from a Cargo manifest.

Only the top-level ``dependencies`` table is read. Each entry is either a
bare version string or an inline/sub-table with optional ``version`` and
``features`` keys. An entry of any other shape keeps its name with an
empty constraint and no features. Entries with an empty name are skipped
rather than failing the load.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from crate_update.core.manifest.models import (
    DeclaredDependency,
    ScalarSpec,
    TableSpec,
    classify_entry,
)
from crate_update.exceptions import (
    ManifestParseError,
    ManifestReadError,
    NoDependenciesError,
)

logger = logging.getLogger(__name__)

DEPENDENCIES_KEY: str = "dependencies"


def load(path: str | Path) -> list[DeclaredDependency]:
    """Read and parse the manifest at *path*.

    Args:
        path: Location of the Cargo.toml file.

    Returns:
        Declared dependencies in the order they appear in the table.

    Raises:
        ManifestReadError: If the file cannot be read.
        ManifestParseError: If the file is not valid TOML.
        NoDependenciesError: If there is no ``dependencies`` table.
    """
    manifest_path = Path(path)
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestReadError(f"cannot read {manifest_path}: {exc}") from exc
    return parse_manifest(text, source=str(manifest_path))


def parse_manifest(text: str, *, source: str = "<string>") -> list[DeclaredDependency]:
    """Parse manifest text into declared dependencies.

    Args:
        text: TOML document.
        source: Name used in error and log messages.

    Returns:
        Declared dependencies in table order.

    Raises:
        ManifestParseError: If *text* is not valid TOML.
        NoDependenciesError: If there is no ``dependencies`` table.
    """
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ManifestParseError(f"{source} is not valid TOML: {exc}") from exc

    table = document.get(DEPENDENCIES_KEY)
    if not isinstance(table, dict):
        raise NoDependenciesError(f"{source} has no [{DEPENDENCIES_KEY}] table")

    declared: list[DeclaredDependency] = []
    for name, value in table.items():
        if not name:
            logger.debug("Skipping entry with an empty name in %s", source)
            continue
        declared.append(_to_declared(name, value))

    logger.debug("Loaded %d dependencies from %s", len(declared), source)
    return declared


def _to_declared(name: str, value: Any) -> DeclaredDependency:
    """Interpret one ``[dependencies]`` entry."""
    spec = classify_entry(value)
    if isinstance(spec, ScalarSpec):
        return DeclaredDependency(name=name, constraint=spec.version)
    if isinstance(spec, TableSpec):
        version = spec.fields.get("version")
        return DeclaredDependency(
            name=name,
            constraint=version if isinstance(version, str) else "",
            features=_features(spec.fields.get("features")),
        )
    logger.debug("Unsupported value for %s: %r", name, value)
    return DeclaredDependency(name=name)


def _features(raw: Any) -> tuple[str, ...]:
    """Collect string features in order, dropping repeats and non-strings."""
    if not isinstance(raw, list):
        return ()
    seen: dict[str, None] = {}
    for item in raw:
        if isinstance(item, str):
            seen.setdefault(item, None)
    return tuple(seen)
