"""crate-update exception hierarchy.

All public exceptions inherit from CrateUpdateError, giving callers a single
base class to catch when they want to handle any crate-update failure
without swallowing unrelated errors.

Manifest errors are fatal for a run. Registry and apply-launch errors are
scoped to a single dependency and never abort a batch.
"""

from __future__ import annotations


class CrateUpdateError(Exception):
    """Base exception for all crate-update errors."""


class ConfigError(CrateUpdateError):
    """Raised when updater settings are out of range or inconsistent."""


class ManifestError(CrateUpdateError):
    """Raised when the manifest cannot be turned into dependency records.

    Covers unreadable files, invalid TOML, and manifests that declare no
    ``[dependencies]`` table. Always raised before any network activity.
    """


class ManifestReadError(ManifestError):
    """Raised when the manifest file cannot be read."""


class ManifestParseError(ManifestError):
    """Raised when the manifest is not valid TOML."""


class NoDependenciesError(ManifestError):
    """Raised when the manifest has no top-level ``dependencies`` table."""


class RegistryError(CrateUpdateError):
    """Raised when the latest version of one crate cannot be determined.

    Wraps transport failures, timeouts, non-2xx responses, and response
    bodies that do not match the expected shape.

    Attributes:
        name: The crate whose lookup failed.
        cause: Human-readable description of the underlying failure.
    """

    def __init__(self, name: str, cause: str) -> None:
        super().__init__(f"{name}: {cause}")
        self.name = name
        self.cause = cause


class ApplyLaunchError(CrateUpdateError):
    """Raised when the package manager subprocess cannot be started.

    Distinct from a subprocess that ran and exited nonzero, which is
    reported as an unsuccessful ``Applied`` result instead.

    Attributes:
        name: The crate whose update could not be launched.
        cause: Human-readable description of the underlying OS error.
    """

    def __init__(self, name: str, cause: str) -> None:
        super().__init__(f"{name}: {cause}")
        self.name = name
        self.cause = cause
