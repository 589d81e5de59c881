"""
Plugin definition models.

These are the intermediate dataclasses produced by the extractors and
consumed by the code emitter. A descriptor is built once per run; command
and event definitions are created in source order and later receive the
rewritten form of their body.
"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_PLUGIN_NAME = "MyPlugin"
DEFAULT_PLUGIN_VERSION = "1.0"
DEFAULT_PLUGIN_PACKAGE = "me.example.myplugin"
DEFAULT_DATA_FILE = "data.json"
DEFAULT_COMMAND_DESCRIPTION = "A test command."


def capitalize(name: str) -> str:
    """Upper-case the first character and lower-case the rest ("tpA" -> "Tpa")."""
    if not name:
        return name
    return name[:1].upper() + name[1:].lower()


@dataclass(frozen=True)
class PluginDescriptor:
    """Plugin identity and the persistent-data settings that go with it."""

    name: str = DEFAULT_PLUGIN_NAME
    version: str = DEFAULT_PLUGIN_VERSION
    package: str = DEFAULT_PLUGIN_PACKAGE
    data_file: str = DEFAULT_DATA_FILE
    uses_data: bool = False

    @property
    def package_path(self) -> str:
        """Package as a relative directory path (me.example -> me/example)."""
        return self.package.replace(".", "/")

    @property
    def main_class(self) -> str:
        """Fully qualified name of the generated entry point."""
        return f"{self.package}.Main"

    @property
    def jar_name(self) -> str:
        return f"{self.name}.jar"


@dataclass
class CommandDefinition:
    """A `command("name", (param) => { ... })` declaration."""

    name: str
    parameter: str
    body: str
    description: str = DEFAULT_COMMAND_DESCRIPTION
    rewritten_body: Optional[str] = None  # Filled in after the rewrite pipeline

    @property
    def class_name(self) -> str:
        """Name of the standalone executor class generated for this command."""
        return capitalize(self.name)

    @property
    def usage(self) -> str:
        return f"/{self.name}"

    @property
    def effective_body(self) -> str:
        """Rewritten body when available, raw body otherwise."""
        if self.rewritten_body is not None:
            return self.rewritten_body
        return self.body


@dataclass
class EventDefinition:
    """An `event("name", (param) => { ... })` declaration."""

    name: str
    parameter: str
    body: str
    event_type: str
    event_package: str
    rewritten_body: Optional[str] = None

    @property
    def qualified_type(self) -> str:
        return f"{self.event_package}.{self.event_type}"

    @property
    def method_name(self) -> str:
        """Listener method name (playerJoin -> onPlayerjoin)."""
        return "on" + capitalize(self.name)

    @property
    def effective_body(self) -> str:
        if self.rewritten_body is not None:
            return self.rewritten_body
        return self.body
