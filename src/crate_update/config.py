"""Updater settings shared by the CLI, the registry client and the engine.

Module-level constants hold the defaults; ``UpdaterConfig`` bundles them
into one validated, immutable value that the CLI builds from its options.
"""

from __future__ import annotations

from dataclasses import dataclass

from crate_update.exceptions import ConfigError

DEFAULT_MANIFEST: str = "./Cargo.toml"

DEFAULT_REGISTRY_URL: str = "https://crates.io/api/v1/crates"

# crates.io rejects requests without a descriptive agent.
USER_AGENT: str = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/116.0.0.0 Safari/537.36"
)

# Upper bound for a single registry lookup (seconds).
DEFAULT_TIMEOUT: float = 30.0

# Maximum number of registry lookups in flight at once.
DEFAULT_CONCURRENCY: int = 10

# Capacity of the bounded completion queue between workers and collector.
DEFAULT_CHANNEL_CAPACITY: int = 10

DEFAULT_CARGO: str = "cargo"


@dataclass(frozen=True)
class UpdaterConfig:
    """Tunables for one crate-update run.

    Attributes:
        registry_url: Base URL of the crates API; the crate name is appended.
        user_agent: User-Agent header sent with every registry request.
        timeout: Per-lookup timeout in seconds.
        concurrency: Maximum simultaneous registry lookups.
        channel_capacity: Size of the bounded completion queue.
        cargo: Package-manager executable used to apply updates.
    """

    registry_url: str = DEFAULT_REGISTRY_URL
    user_agent: str = USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    concurrency: int = DEFAULT_CONCURRENCY
    channel_capacity: int = DEFAULT_CHANNEL_CAPACITY
    cargo: str = DEFAULT_CARGO

    def __post_init__(self) -> None:
        if not self.registry_url.strip():
            raise ConfigError("registry_url must not be empty")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.concurrency < 1:
            raise ConfigError(f"concurrency must be at least 1, got {self.concurrency}")
        if self.channel_capacity < 1:
            raise ConfigError(
                f"channel_capacity must be at least 1, got {self.channel_capacity}"
            )
        if not self.cargo.strip():
            raise ConfigError("cargo executable must not be empty")
