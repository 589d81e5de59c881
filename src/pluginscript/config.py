"""
pluginscript Configuration.

Centralized configuration management using Pydantic Settings.
Loads configuration from environment variables prefixed with PLUGINSCRIPT_.
"""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PLUGINSCRIPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Output layout
    output_dir: str = "output"  # Where plugin.yml, sources and the jar are written

    # Build tools
    javac_executable: str = "javac"
    jar_executable: str = "jar"
    javac_verbose: bool = True  # Pass -verbose to javac and log its output
    server_jar_path: str = "spigot.jar"  # Server API jar placed on the classpath
    json_simple_jar_path: str = "json-simple.jar"  # Needed by data/JSON helpers
    delete_sources_after_build: bool = True  # Remove .java files before archiving

    # Logging
    log_level: str = "INFO"
    log_dir: str = ""  # Empty means the XDG state directory, see log_directory
    log_format: str = "standard"  # standard or json
    log_console_enabled: bool = True
    log_file_enabled: bool = False
    log_max_bytes: int = 10_485_760  # 10MB per log file
    log_backup_count: int = 5

    @property
    def log_directory(self) -> Path:
        """
        Directory for rotating log files.

        An explicit `log_dir` wins. Otherwise logs go to
        `$XDG_STATE_HOME/pluginscript/logs`, then to
        `~/.local/state/pluginscript/logs`, and to `./logs` when neither
        variable is set.
        """
        if self.log_dir:
            return Path(self.log_dir).expanduser()

        state_home = os.getenv("XDG_STATE_HOME")
        if not state_home and os.getenv("HOME"):
            state_home = str(Path(os.environ["HOME"]) / ".local" / "state")
        if not state_home:
            return Path("logs")
        return Path(state_home) / "pluginscript" / "logs"

    @property
    def output_path(self) -> Path:
        """Output directory as a Path."""
        return Path(self.output_dir).expanduser()

    def build_classpath(self, output_dir: Path, needs_json: bool) -> str:
        """
        Classpath handed to javac.

        The json-simple jar is only added when the generated code uses the
        persistent-data handler or JSON parsing.
        """
        entries = [str(output_dir), self.server_jar_path]
        if needs_json:
            entries.append(self.json_simple_jar_path)
        return os.pathsep.join(entries)


# Global settings instance
settings = Settings()
