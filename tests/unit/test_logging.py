"""Unit tests for session logging setup and timestamps."""

import re

import pytest
from loguru import logger

from jobtailor.contexts.tailoring.logger import setup_tailoring_logger
from jobtailor.utils import session_stamp, today


@pytest.fixture
def reset_logger():
    yield
    logger.remove()


@pytest.mark.unit
def test_setup_tailoring_logger_writes_provenance(tmp_path, reset_logger):
    """Test the session log file is created with the provenance header."""
    log_file = setup_tailoring_logger(tmp_path / "tailor_session", "deepseek-chat", "json")
    logger.info("[tailor] hello")
    logger.complete()

    assert log_file == tmp_path / "tailor_session" / "tailor.log"
    text = log_file.read_text()
    assert "Model: deepseek-chat" in text
    assert "Reply format: json" in text
    assert f"Log file: {log_file}" in text
    assert "[tailor] hello" in text


@pytest.mark.unit
def test_console_shows_info_but_file_keeps_debug(tmp_path, reset_logger, capsys):
    """Test the default console level hides debug messages the file still records."""
    log_file = setup_tailoring_logger(tmp_path, "deepseek-chat", "tags")
    logger.debug("[tailor] payload details")
    logger.info("[tailor] requesting")
    logger.complete()

    console = capsys.readouterr().err
    assert "[tailor] requesting" in console
    assert "[tailor] payload details" not in console
    assert "[tailor] payload details" in log_file.read_text()


@pytest.mark.unit
def test_verbose_console_shows_debug(tmp_path, reset_logger, capsys):
    """Test verbose sessions echo debug messages to the console."""
    setup_tailoring_logger(tmp_path, "deepseek-chat", "tags", verbose=True)
    logger.debug("[tailor] payload details")
    logger.complete()

    assert "[tailor] payload details" in capsys.readouterr().err


@pytest.mark.unit
def test_timestamp_formats():
    """Test date and session stamp shapes."""
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", today())
    assert re.fullmatch(r"\d{8}_\d{6}", session_stamp())
