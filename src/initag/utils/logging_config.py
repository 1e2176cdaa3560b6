"""Logging helpers for the initag command line."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "initag"
_LOG_CONFIGURED = False


def configure_logging(level: str = "WARNING") -> None:
    """Attach a rich stderr handler to the package root logger (first call only).

    The library itself never installs handlers; only the CLI calls this.
    Later calls just adjust the level.

    Args:
        level: Logging level name, e.g. ``"DEBUG"``.
    """
    global _LOG_CONFIGURED
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(level.upper())
    if _LOG_CONFIGURED:
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        log_time_format="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    root_logger.addHandler(handler)
    root_logger.propagate = False

    _LOG_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``initag`` namespace."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
