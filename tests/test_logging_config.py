"""
Tests for logging setup.
"""

import json
import logging

import pytest
from rich.logging import RichHandler

from pluginscript.config import Settings
from pluginscript.logging_config import JsonFormatter, setup_logging


def installed_handlers():
    return [
        h for h in logging.getLogger().handlers if getattr(h, "_pluginscript_handler", False)
    ]


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Remove handlers installed by setup_logging after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in installed_handlers():
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_handler(self):
        """Test that the default console handler is a RichHandler."""
        setup_logging(config=Settings(log_level="DEBUG", log_file_enabled=False))

        handlers = installed_handlers()
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)
        assert logging.getLogger().level == logging.DEBUG

    def test_repeated_setup_does_not_stack(self):
        """Test that calling setup twice replaces the handlers."""
        config = Settings(log_file_enabled=False)

        setup_logging(config=config)
        setup_logging(config=config)

        assert len(installed_handlers()) == 1

    def test_json_console_handler(self):
        setup_logging(config=Settings(log_format="json", log_file_enabled=False))

        handler = installed_handlers()[0]
        assert not isinstance(handler, RichHandler)
        assert isinstance(handler.formatter, JsonFormatter)

    def test_file_handler(self, tmp_path):
        """Test that file logging writes JSON lines under the log directory."""
        config = Settings(
            log_console_enabled=False,
            log_file_enabled=True,
            log_dir=str(tmp_path / "logs"),
            log_format="json",
        )

        setup_logging(context="test", config=config)
        logging.getLogger("pluginscript.test").warning("hello")
        for handler in installed_handlers():
            handler.flush()

        line = (tmp_path / "logs" / "test.log").read_text(encoding="utf-8").strip()
        payload = json.loads(line)
        assert payload["message"] == "hello"
        assert payload["level"] == "WARNING"
        assert payload["context"] == "test"


class TestJsonFormatter:
    def test_format(self):
        record = logging.LogRecord(
            name="pluginscript.x",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="value=%s",
            args=(3,),
            exc_info=None,
        )

        payload = json.loads(JsonFormatter().format(record))

        assert payload["logger"] == "pluginscript.x"
        assert payload["message"] == "value=3"
        assert "context" not in payload
