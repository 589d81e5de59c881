"""Data models shared by the extractors, the rewrite pipeline and the emitter."""

from pluginscript.models.definitions import (
    DEFAULT_COMMAND_DESCRIPTION,
    DEFAULT_DATA_FILE,
    DEFAULT_PLUGIN_NAME,
    DEFAULT_PLUGIN_PACKAGE,
    DEFAULT_PLUGIN_VERSION,
    CommandDefinition,
    EventDefinition,
    PluginDescriptor,
    capitalize,
)

__all__ = [
    "DEFAULT_COMMAND_DESCRIPTION",
    "DEFAULT_DATA_FILE",
    "DEFAULT_PLUGIN_NAME",
    "DEFAULT_PLUGIN_PACKAGE",
    "DEFAULT_PLUGIN_VERSION",
    "CommandDefinition",
    "EventDefinition",
    "PluginDescriptor",
    "capitalize",
]
