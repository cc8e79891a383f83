"""Logging setup for the crate-update command-line tool.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed here, once, by the CLI entry point.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV: str = "CRATE_UPDATE_LOG_LEVEL"


def configure_logging(verbose: bool = False) -> None:
    """Route log records to stderr through a Rich handler.

    Args:
        verbose: Log at DEBUG instead of WARNING. The ``CRATE_UPDATE_LOG_LEVEL``
            environment variable takes precedence when set.
    """
    default = "DEBUG" if verbose else "WARNING"
    level = os.environ.get(LOG_LEVEL_ENV, default).upper()

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("crate_update")
    root.handlers[:] = [handler]
    root.setLevel(level)

    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
