"""Tests for structured logging setup."""

from __future__ import annotations

import json
import logging

import pytest

from retreat.history.buffer import HistoryBuffer
from retreat.utils.logging import setup_logging


def _close_file_handlers() -> None:
    root = logging.getLogger("retreat")
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            handler.close()
            root.removeHandler(handler)


class TestSetupLogging:
    def test_console_output(self, capfd):
        """setup_logging() should produce output on stderr."""
        setup_logging("DEBUG")
        logger = logging.getLogger("retreat.test_console")
        logger.info("hello console")
        err = capfd.readouterr().err
        assert "hello console" in err

    def test_log_level_propagation(self):
        """Setting level=WARNING should suppress INFO messages."""
        setup_logging("WARNING")
        root = logging.getLogger("retreat")
        assert root.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("NOPE")
        assert logging.getLogger("retreat").level == logging.INFO

    def test_json_mode(self, capfd):
        """log_json=True should output valid JSON."""
        setup_logging("INFO", log_json=True)
        logger = logging.getLogger("retreat.test_json")
        logger.info("json test")
        err = capfd.readouterr().err
        assert "json test" in err
        for line in err.strip().splitlines():
            if "json test" in line:
                data = json.loads(line)
                assert data["event"] == "json test"
                assert data["level"] == "info"
                break
        else:
            pytest.fail("no JSON line found")

    def test_file_logging(self, tmp_path):
        """log_file should create a log file with content."""
        log_path = tmp_path / "retreat.log"
        setup_logging("INFO", log_file=str(log_path))
        logging.getLogger("retreat.test_file").info("file test message")
        for handler in logging.getLogger("retreat").handlers:
            handler.flush()
        assert log_path.exists()
        assert "file test message" in log_path.read_text()
        _close_file_handlers()

    def test_file_creates_parent_dirs(self, tmp_path):
        """log_file in a non-existent directory should create parent dirs."""
        log_path = tmp_path / "subdir" / "deep" / "retreat.log"
        setup_logging("INFO", log_file=str(log_path))
        logging.getLogger("retreat.test_dir").info("dir test")
        for handler in logging.getLogger("retreat").handlers:
            handler.flush()
        assert log_path.exists()
        _close_file_handlers()

    def test_repeated_setup_no_duplicate_handlers(self):
        """Calling setup_logging twice should not add duplicate handlers."""
        setup_logging("INFO")
        count1 = len(logging.getLogger("retreat").handlers)
        setup_logging("INFO")
        count2 = len(logging.getLogger("retreat").handlers)
        assert count2 == count1 == 1

    def test_does_not_propagate(self):
        setup_logging("INFO")
        assert logging.getLogger("retreat").propagate is False


class TestBufferLogging:
    def test_eviction_logged_at_debug(self, capfd):
        setup_logging("DEBUG")
        b = HistoryBuffer(1)
        b.push("a")
        b.push("b")
        err = capfd.readouterr().err
        assert "Evicted slot 0 for history index 1" in err

    def test_eviction_silent_at_info(self, capfd):
        setup_logging("INFO")
        b = HistoryBuffer(1)
        b.push("a")
        b.push("b")
        assert "Evicted" not in capfd.readouterr().err

    def test_swallowed_hook_error_logged(self, capfd):
        setup_logging("INFO")

        def boom(value):
            raise RuntimeError("hook exploded")

        b = HistoryBuffer(1, boom, on_cleanup_error="log")
        b.push("a")
        b.push("b")
        err = capfd.readouterr().err
        assert "Cleanup hook failed for 'a'" in err
        assert "hook exploded" in err
