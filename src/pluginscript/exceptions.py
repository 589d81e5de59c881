"""Custom exceptions for pluginscript."""

from pathlib import Path


class PluginScriptError(Exception):
    """Base exception for all errors that abort a compilation run."""

    pass


class SourceReadError(PluginScriptError):
    """Raised when the DSL source document cannot be read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read source file {path}: {reason}")


class NoCommandsError(PluginScriptError):
    """Raised when a source document declares no commands."""

    def __init__(self, source_name: str | None = None):
        self.source_name = source_name
        message = "No command declarations found in source"
        if source_name:
            message += f": {source_name}"
        super().__init__(message)
