"""Tests for logging_setup.py."""

import logging
import sys
from pathlib import Path

import pytest

# Add scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from rtasks.logging_setup import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for h in list(root.handlers):
        if isinstance(h, (logging.FileHandler, logging.NullHandler)):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_writes_to_file(self, tmp_path: Path, restore_root_logger) -> None:
        log_file = tmp_path / "logs" / "rtasks.log"
        setup_logging(log_file, "DEBUG")

        logging.getLogger("rtasks.test").debug("hello %s", "file")
        for h in restore_root_logger.handlers:
            h.flush()

        text = log_file.read_text()
        assert "DEBUG rtasks.test: hello file" in text

    def test_no_console_handler(self, tmp_path: Path, restore_root_logger) -> None:
        setup_logging(tmp_path / "rtasks.log")
        assert [type(h) for h in restore_root_logger.handlers] == [logging.FileHandler]

    def test_unknown_level_falls_back_to_info(self, tmp_path: Path, restore_root_logger) -> None:
        setup_logging(tmp_path / "rtasks.log", "CHATTY")
        assert restore_root_logger.level == logging.INFO

    def test_disabled(self, restore_root_logger) -> None:
        setup_logging(None)
        assert [type(h) for h in restore_root_logger.handlers] == [logging.NullHandler]
