"""Centralized logging configuration for postcraft."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Final, cast

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["console", "configure_logging"]

_LOG_LEVEL_ENV: Final[str] = "POSTCRAFT_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

# Pillow logs every PNG chunk it reads or writes at DEBUG.
_CHATTY_LOGGERS: Final[tuple[str, ...]] = ("PIL",)

console = Console(stderr=True)

if TYPE_CHECKING:
    class _ManagedRichHandler(RichHandler):
        _postcraft_managed: bool
else:
    _ManagedRichHandler = RichHandler


def _resolve_level(level_name: str | None = None) -> int:
    """Return the logging level from ``level_name`` or the environment."""

    name = (level_name or os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME)).upper()
    return getattr(logging, name, logging.INFO)


def _find_managed_handler(logger: logging.Logger) -> _ManagedRichHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, RichHandler) and getattr(handler, "_postcraft_managed", False):
            return cast(_ManagedRichHandler, handler)
    return None


def configure_logging(level_name: str | None = None) -> None:
    """Configure logging once with a Rich handler.

    ``--verbose`` runs ask for DEBUG; image libraries are held at INFO so
    the output stays about postcraft itself.
    """

    root_logger = logging.getLogger()
    level = _resolve_level(level_name)

    if _find_managed_handler(root_logger) is None:
        root_logger.handlers.clear()
        handler = _ManagedRichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._postcraft_managed = True
        root_logger.addHandler(handler)

    root_logger.setLevel(level)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))

    logging.captureWarnings(True)
