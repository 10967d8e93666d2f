"""Tests for configure_logging."""
import logging
import logging.handlers

import pytest

from machina_search import configure_logging


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.captureWarnings(False)


def test_console_only(restore_root_logging):
    configure_logging("debug")
    root = restore_root_logging
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)


def test_file_handler(tmp_path, restore_root_logging):
    log_file = tmp_path / "logs" / "search.log"
    configure_logging("warning", filepath=log_file, console=False)

    root = restore_root_logging
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.handlers.RotatingFileHandler)
    assert log_file.parent.is_dir()

    logging.getLogger("machina.test").warning("written")
    root.handlers[0].flush()
    assert "| WARNING  | machina.test | written" in log_file.read_text(encoding="utf-8")
    root.handlers[0].close()


def test_unknown_level_defaults_to_info(restore_root_logging):
    configure_logging("chatty")
    assert restore_root_logging.level == logging.INFO
