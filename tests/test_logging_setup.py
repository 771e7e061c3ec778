# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from logging_setup import LOG_FILE_NAME, _ConsoleNoiseFilter, setup_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize("name", ["storage", "scheduling", "__main__"])
def test_console_filter_allows_app_loggers(name: str) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, logging.DEBUG))


@pytest.mark.parametrize("name", ["PyQt6.uic", "py.warnings", "urllib3.connectionpool"])
def test_console_filter_hides_third_party_noise(name: str) -> None:
    f = _ConsoleNoiseFilter()
    assert not f.filter(_record(name, logging.WARNING))
    assert f.filter(_record(name, logging.ERROR))


def test_console_filter_treats_captured_warnings_like_third_party() -> None:
    f = _ConsoleNoiseFilter()
    for level in (logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL):
        assert f.filter(_record("py.warnings", level)) == f.filter(_record("somelib", level))


def test_setup_logging_writes_file(tmp_path: Path, restore_root_logger: logging.Logger) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs")

    logging.getLogger("storage").debug("hello from storage")
    for h in restore_root_logger.handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / LOG_FILE_NAME
    assert "hello from storage" in log_file.read_text(encoding="utf-8")


def test_setup_logging_replaces_handlers(tmp_path: Path, restore_root_logger: logging.Logger) -> None:
    setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)

    assert len(restore_root_logger.handlers) == 2
