"""Manifest loading: turn a Cargo.toml ``[dependencies]`` table into records.

Public API::

    from crate_update.core.manifest import DeclaredDependency, load
"""

from __future__ import annotations

from crate_update.core.manifest.loader import load, parse_manifest
from crate_update.core.manifest.models import (
    DeclaredDependency,
    EntrySpec,
    OtherSpec,
    ScalarSpec,
    TableSpec,
    classify_entry,
)

__all__ = [
    "DeclaredDependency",
    "EntrySpec",
    "OtherSpec",
    "ScalarSpec",
    "TableSpec",
    "classify_entry",
    "load",
    "parse_manifest",
]
