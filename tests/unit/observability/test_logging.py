"""Tests for structured logging."""

import json
import logging

from dialograph.observability.logging import ContextLogger, SessionContextFilter, setup_logging


def test_logging_setup():
    """Test logging configuration."""
    # Arrange & Act
    setup_logging(level="DEBUG")

    # Assert
    logger = logging.getLogger("dialograph")
    assert logger.level == logging.DEBUG


def test_logging_setup_info_level():
    """Test logging setup with INFO level."""
    # Arrange & Act
    setup_logging(level="INFO")

    # Assert
    logger = logging.getLogger("dialograph")
    assert logger.level == logging.INFO


def test_json_file_handler(tmp_path):
    """
    GIVEN a json_file path
    WHEN a dialograph logger writes a record
    THEN the file contains one JSON object per line
    """
    # Arrange
    log_file = tmp_path / "dialograph.log"
    setup_logging(level="INFO", json_file=str(log_file))

    # Act
    logging.getLogger("dialograph.test").info("hello json")
    for handler in logging.getLogger("dialograph").handlers:
        handler.flush()

    # Assert
    record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
    assert record["message"] == "hello json"
    assert record["levelname"] == "INFO"

    # Cleanup
    setup_logging(level="INFO")


def test_context_logger():
    """Test ContextLogger with context."""
    # Arrange
    context_logger = ContextLogger("dialograph.test")

    # Act
    adapter = context_logger.with_context(session_id="s1", graph_id="g1")

    # Assert
    assert isinstance(adapter, logging.LoggerAdapter)
    assert adapter.extra == {"session_id": "s1", "graph_id": "g1"}


def test_model_libraries_stay_at_warning():
    setup_logging(level="DEBUG")

    assert logging.getLogger("sentence_transformers").level == logging.WARNING
    assert logging.getLogger("dialograph.inference.evaluator").getEffectiveLevel() == logging.DEBUG

    setup_logging(level="INFO")


class TestSessionContextFilter:
    def test_tags_records_from_a_session(self):
        record = logging.makeLogRecord({"msg": "moved", "session_id": "s1", "graph_id": "g1"})

        assert SessionContextFilter().filter(record)
        assert record.session == "[s1 g1] "

    def test_untagged_record_gets_empty_prefix(self):
        record = logging.makeLogRecord({"msg": "saved"})

        assert SessionContextFilter().filter(record)
        assert record.session == ""

    def test_json_file_keeps_session_fields(self, tmp_path):
        """
        GIVEN JSON file logging
        WHEN a session-tagged adapter logs
        THEN the JSON record carries session_id and graph_id as fields
        """
        # Arrange
        log_file = tmp_path / "dialograph.log"
        setup_logging(level="INFO", json_file=str(log_file))
        adapter = ContextLogger("dialograph.runtime.session").with_context(
            session_id="s1", graph_id="g1"
        )

        # Act
        adapter.info("Session started at node start")
        for handler in logging.getLogger("dialograph").handlers:
            handler.flush()

        # Assert
        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert record["session_id"] == "s1"
        assert record["graph_id"] == "g1"

        # Cleanup
        setup_logging(level="INFO")
