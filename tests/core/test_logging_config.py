"""Tests for agentgraph.core.logging_config module."""

import json
import logging

import pytest

from agentgraph.core.logging_config import JsonFormatter, configure_logging, set_level


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_explicit_level(self, restore_logging):
        """Explicit level is applied to the root logger."""
        configure_logging(level="debug", force=True)
        assert restore_logging.level == logging.DEBUG
        assert len(restore_logging.handlers) == 1

    def test_env_level(self, restore_logging, monkeypatch):
        """AGENTGRAPH_LOG_LEVEL is used when no level is given."""
        monkeypatch.setenv("AGENTGRAPH_LOG_LEVEL", "ERROR")
        configure_logging(force=True)
        assert restore_logging.level == logging.ERROR

    def test_json_format(self, restore_logging):
        """format='json' installs the JSON formatter."""
        configure_logging(level="INFO", format="json", force=True)
        assert isinstance(restore_logging.handlers[0].formatter, JsonFormatter)

    def test_second_call_ignored(self, restore_logging):
        """Without force, a second call keeps the first configuration."""
        configure_logging(level="INFO", force=True)
        configure_logging(level="DEBUG")
        assert restore_logging.level == logging.INFO

    def test_file_handler(self, restore_logging, tmp_path):
        """file_path adds a file handler."""
        log_file = tmp_path / "agentgraph.log"
        configure_logging(level="INFO", file_path=str(log_file), force=True)

        logging.getLogger("agentgraph.test").info("hello")
        for handler in restore_logging.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()
        for handler in restore_logging.handlers:
            if isinstance(handler, logging.FileHandler):
                handler.close()

    def test_invalid_level(self, restore_logging):
        """Unknown levels raise ValueError."""
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging(level="LOUD", force=True)

    def test_invalid_format(self, restore_logging):
        """Unknown formats raise ValueError."""
        with pytest.raises(ValueError, match="Unknown log format"):
            configure_logging(format="xml", force=True)  # type: ignore[arg-type]


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_format(self):
        """Records become one JSON object with extras."""
        record = logging.LogRecord(
            name="agentgraph.core.graph.executor",
            level=logging.DEBUG,
            pathname=__file__,
            lineno=1,
            msg="[g] run_start: run_id=%s",
            args=("r1",),
            exc_info=None,
        )
        record.graph = "g"

        data = json.loads(JsonFormatter().format(record))
        assert data["level"] == "DEBUG"
        assert data["logger"] == "agentgraph.core.graph.executor"
        assert data["message"] == "[g] run_start: run_id=r1"
        assert data["extra"] == {"graph": "g"}


class TestSetLevel:
    """Tests for set_level()."""

    def test_named_logger(self):
        """set_level targets a named logger."""
        logger = logging.getLogger("agentgraph.test.set_level")
        set_level("warning", "agentgraph.test.set_level")
        assert logger.level == logging.WARNING
