"""Version comparison policies for the changed-version filter.

``EXACT`` reproduces the plain string inequality used to decide whether a
dependency is outdated. ``SEMVER`` is an opt-in refinement: when the
declared constraint is a single plain version (optionally prefixed by
``^``, ``=`` or ``~``), missing minor and patch components are padded with
zeros and the numbers are compared, so ``"1.0"`` and ``"1.0.0"`` count as
the same version. Anything else (ranges, wildcards, empty constraints)
falls back to string inequality.

References
----------
.. [SemVer] Preston-Werner, T. (2013). "Semantic Versioning 2.0.0."
   https://semver.org/
"""

from __future__ import annotations

import re
from enum import Enum

_PLAIN_VERSION_RE = re.compile(
    r"^\s*(?:\^|=|~)?\s*"
    r"(?P<major>0|[1-9]\d*)"
    r"(?:\.(?P<minor>0|[1-9]\d*))?"
    r"(?:\.(?P<patch>0|[1-9]\d*))?"
    r"(?:-(?P<pre>[0-9A-Za-z\-.]+))?"
    r"(?:\+[0-9A-Za-z\-.]+)?\s*$"
)


class VersionComparison(Enum):
    """How a resolved version is compared against the declared constraint."""

    EXACT = "exact"
    SEMVER = "semver"


def parse_plain_version(text: str) -> tuple[int, int, int, str] | None:
    """Parse a plain, possibly partial, version into a comparable tuple.

    Build metadata is ignored, following SemVer precedence rules.

    Args:
        text: Version such as "1", "1.2", "^1.2.3" or "0.1.0-alpha".

    Returns:
        ``(major, minor, patch, pre)``, or None if *text* is not a plain
        version.
    """
    m = _PLAIN_VERSION_RE.match(text)
    if not m:
        return None
    return (
        int(m.group("major")),
        int(m.group("minor") or 0),
        int(m.group("patch") or 0),
        m.group("pre") or "",
    )


def is_changed(
    constraint: str,
    resolved: str,
    comparison: VersionComparison = VersionComparison.EXACT,
) -> bool:
    """Decide whether *resolved* counts as an update over *constraint*."""
    if comparison is VersionComparison.SEMVER:
        declared = parse_plain_version(constraint)
        latest = parse_plain_version(resolved)
        if declared is not None and latest is not None:
            return declared != latest
    return resolved != constraint
