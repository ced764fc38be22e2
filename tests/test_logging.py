"""Tests for logging setup and the timing helpers."""

import logging

import pytest

from gtools.utils.logging import log_call, setup_logging, timed

logger = logging.getLogger("gtools.tests")


def test_setup_logging_appends_to_log_file(temp_dir):
    log_file = temp_dir / "gtools.log"
    setup_logging(verbose=True, log_file=log_file)
    try:
        logger.debug("read %d intervals", 3)
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "read 3 intervals" in log_file.read_text()
        assert logging.getLogger().level == logging.DEBUG
    finally:
        setup_logging()
    assert logging.getLogger().level == logging.INFO


def test_timed_logs_duration(caplog):
    with caplog.at_level(logging.DEBUG):
        with timed("Merging regions.bed", logger):
            pass
    assert "Merging regions.bed took" in caplog.text


def test_log_call_logs_input_and_failure(caplog):
    @log_call(logger)
    def parse(path):
        if path == "bad.txt":
            raise ValueError("no header")
        return path.upper()

    with caplog.at_level(logging.DEBUG):
        assert parse("ok.txt") == "OK.TXT"
        with pytest.raises(ValueError):
            parse("bad.txt")
    assert "parse(ok.txt) done in" in caplog.text
    assert "parse(bad.txt) failed: no header" in caplog.text
