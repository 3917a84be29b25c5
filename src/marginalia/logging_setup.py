"""Logging for the marginalia CLI.

All output goes through one Rich console shared with the CLI's own
messages. The level comes from ``--debug`` when given, otherwise from
``MARGINALIA_LOG_LEVEL``.
"""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

LOG_LEVEL_ENV: Final[str] = "MARGINALIA_LOG_LEVEL"

# markdown-it logs every rule it runs at DEBUG
_QUIET_LOGGERS: Final[tuple[str, ...]] = ("markdown_it",)

console = Console()


def _level_from_env() -> int:
    name = os.getenv(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _site_handler(root: logging.Logger) -> RichHandler | None:
    for handler in root.handlers:
        if getattr(handler, "_marginalia_site_log", False):
            return handler  # type: ignore[return-value]
    return None


def configure_logging(*, debug: bool = False) -> int:
    """Install the Rich handler on the root logger and set the level.

    Safe to call more than once: later calls only change the level, so a
    command's ``--debug`` flag can raise verbosity after startup.

    Returns:
        The level that was applied.

    """
    root = logging.getLogger()
    if _site_handler(root) is None:
        handler = RichHandler(
            console=console,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            log_time_format="[%H:%M:%S]",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._marginalia_site_log = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    level = logging.DEBUG if debug else _level_from_env()
    root.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
    logging.captureWarnings(True)
    return level
