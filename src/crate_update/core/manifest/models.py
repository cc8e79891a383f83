"""Manifest data models: declared dependencies and entry shapes.

``DeclaredDependency`` is what the rest of the pipeline consumes. The
``*Spec`` classes form a tagged variant describing the raw TOML value of a
single ``[dependencies]`` entry before it is interpreted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DeclaredDependency:
    """A dependency as declared in the manifest.

    Attributes:
        name: Crate name, unique within the manifest.
        constraint: Version requirement as written (e.g. "1.0", "^0.4").
            Empty when the entry declares no version.
        features: Requested features, in declaration order.
    """

    name: str
    constraint: str = ""
    features: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("dependency name must not be empty")


# ---------------------------------------------------------------------------
# Entry shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScalarSpec:
    """``name = "1.0"``"""

    version: str


@dataclass(frozen=True)
class TableSpec:
    """``name = { version = "1.0", features = [...] }``"""

    fields: dict[str, Any]


@dataclass(frozen=True)
class OtherSpec:
    """Any value shape the updater does not understand (ints, arrays, ...)."""

    value: Any


EntrySpec = ScalarSpec | TableSpec | OtherSpec


def classify_entry(value: Any) -> EntrySpec:
    """Tag a raw TOML value with the entry shape it represents."""
    if isinstance(value, str):
        return ScalarSpec(value)
    if isinstance(value, dict):
        return TableSpec(value)
    return OtherSpec(value)
