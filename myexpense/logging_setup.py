"""Centralized logging configuration for the ``myexpense`` package.

- ``configure_logging(...)``: attach a single ``RichHandler`` to the package
  root logger (``"myexpense"``). Called once by the CLI at startup.
- ``get_logger(name)``: acquire a logger, making sure the package root logger
  has at least a ``NullHandler`` when nothing has been configured.

Library modules never attach their own handlers.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

_PKG_LOGGER_NAME = "myexpense"
_ENV_LEVEL = "MYEXPENSE_LOG_LEVEL"
_CONFIGURED = False


def parse_level(level: int | str | None, default: int = logging.WARNING) -> int:
    """Resolve a level given as int, level name or numeric string.

    When ``level`` is None, the ``MYEXPENSE_LOG_LEVEL`` environment variable
    is consulted before falling back to ``default``.
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        return default
    env_val = os.getenv(_ENV_LEVEL)
    if env_val:
        return parse_level(env_val, default)
    return default


def configure_logging(level: int | str | None = None, *, console: Console | None = None) -> None:
    """Configure the package root logger exactly once.

    Args:
        level: Level as int or name. None defers to the environment.
        console: Console to log to. Defaults to stderr.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = parse_level(level)
    handler = RichHandler(console=console or Console(stderr=True), show_path=False)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, silent until the application configures one."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
