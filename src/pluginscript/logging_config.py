"""
Logging setup for pluginscript.

Console output goes through rich so it interleaves cleanly with the CLI's
progress bar; file output is optional and rotates by size.
"""

import json
import logging
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

from rich.logging import RichHandler

from pluginscript.config import Settings, settings

_HANDLER_MARKER = "_pluginscript_handler"

STANDARD_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


class _ContextFilter(logging.Filter):
    def __init__(self, context: str) -> None:
        super().__init__()
        self.context = context

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = self.context
        return True


def _make_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JsonFormatter()
    return logging.Formatter(STANDARD_FORMAT)


def setup_logging(
    context: str = "cli", config: Optional[Settings] = None
) -> logging.Logger:
    """
    Configure the root logger for a pluginscript process.

    Calling this more than once replaces the handlers installed by the
    previous call instead of stacking them.

    Args:
        context: Name of the entry point, used for the log file name
        config: Settings to read from (defaults to the global settings)

    Returns:
        The configured root logger

    Raises:
        PermissionError: If the log directory cannot be created
    """
    config = config or settings
    root = logging.getLogger()
    root.setLevel(config.log_level.upper())

    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()

    handlers: list[logging.Handler] = []

    if config.log_console_enabled:
        if config.log_format == "json":
            console_handler: logging.Handler = logging.StreamHandler()
            console_handler.setFormatter(JsonFormatter())
        else:
            console_handler = RichHandler(show_path=False, rich_tracebacks=True)
        handlers.append(console_handler)

    if config.log_file_enabled:
        log_dir = config.log_directory
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / f"{context}.log",
            maxBytes=config.log_max_bytes,
            backupCount=config.log_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(_make_formatter(config.log_format))
        handlers.append(file_handler)

    for handler in handlers:
        setattr(handler, _HANDLER_MARKER, True)
        handler.addFilter(_ContextFilter(context))
        root.addHandler(handler)

    return root
