from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from postcraft.logging_setup import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    pil = logging.getLogger("PIL")
    handlers, level, pil_level = list(root.handlers), root.level, pil.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    pil.setLevel(pil_level)


def _managed(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if isinstance(h, RichHandler) and getattr(h, "_postcraft_managed", False)]


def test_configure_logging_installs_one_handler(restore_root_logger) -> None:
    configure_logging()
    configure_logging()

    assert len(_managed(restore_root_logger)) == 1


def test_level_from_environment(restore_root_logger, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POSTCRAFT_LOG_LEVEL", "warning")

    configure_logging()

    assert restore_root_logger.level == logging.WARNING


def test_explicit_level_wins(restore_root_logger, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POSTCRAFT_LOG_LEVEL", "warning")

    configure_logging("DEBUG")

    assert restore_root_logger.level == logging.DEBUG


def test_debug_does_not_open_up_pillow(restore_root_logger) -> None:
    configure_logging("DEBUG")

    assert logging.getLogger("PIL").level == logging.INFO
    assert not logging.getLogger("PIL.PngImagePlugin").isEnabledFor(logging.DEBUG)


def test_pillow_follows_stricter_levels(restore_root_logger) -> None:
    configure_logging("ERROR")

    assert logging.getLogger("PIL").level == logging.ERROR
