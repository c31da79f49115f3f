"""Runtime settings and logging setup for the ensurable CLI.

The library itself never configures logging; only the CLI calls
``configure_logging``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class Settings:
    """Settings resolved from the environment; CLI options override them."""

    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> Settings:
        level = os.environ.get("ENSURABLE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if level not in LOG_LEVELS:
            level = DEFAULT_LOG_LEVEL
        return cls(log_level=level)


def configure_logging(level: str, console: Console | None = None) -> None:
    """Route the ``ensurable`` loggers through rich at ``level``."""
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger("ensurable")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())
    package_logger.propagate = False
