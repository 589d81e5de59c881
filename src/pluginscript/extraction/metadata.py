"""
Plugin metadata extraction.

Recognizes two fixed idioms:

    plugin(() => {
        name("MyPlugin");
        version("1.0");
        package("me.example.myplugin");
    });

    data.set("nombre", "players.json");

The first supplies the plugin identity; the second, only consulted when the
script touches persistent data at all, names the data file. Missing idioms
fall back to defaults without complaint.
"""

import logging
import re

from pluginscript.models.definitions import (
    DEFAULT_DATA_FILE,
    DEFAULT_PLUGIN_NAME,
    DEFAULT_PLUGIN_PACKAGE,
    DEFAULT_PLUGIN_VERSION,
    PluginDescriptor,
)

logger = logging.getLogger(__name__)

DATA_USAGE_PATTERN = re.compile(r"\bdata\.(?:set|get|getArray)\(")
DATA_FILE_PATTERN = re.compile(
    r"\bdata\.set\(\"nombre\",\s*\"([^\"]+)\"\);"
)
PLUGIN_DECLARATION_PATTERN = re.compile(
    r"\bplugin\(\(\)\s*=>\s*\{\s*name\(\"([^\"]+)\"\);"
    r"\s*version\(\"([^\"]+)\"\);"
    r"\s*package\(\"([^\"]+)\"\);"
)


def uses_persistent_data(source: str) -> bool:
    return bool(DATA_USAGE_PATTERN.search(source))


def extract_data_file(source: str) -> str:
    """Data file declared via `data.set("nombre", ...)`, or the default."""
    match = DATA_FILE_PATTERN.search(source)
    if match:
        return match.group(1)
    return DEFAULT_DATA_FILE


def extract_metadata(source: str) -> PluginDescriptor:
    """
    Build the plugin descriptor for a DSL document.

    Args:
        source: Raw DSL text

    Returns:
        PluginDescriptor with the declared name/version/package, or the
        defaults when the declaration triplet is absent
    """
    uses_data = uses_persistent_data(source)
    data_file = extract_data_file(source) if uses_data else DEFAULT_DATA_FILE

    match = PLUGIN_DECLARATION_PATTERN.search(source)
    if match:
        name, version, package = match.group(1), match.group(2), match.group(3)
    else:
        logger.info(
            "No plugin(() => { name(); version(); package(); }) declaration found, "
            "using defaults"
        )
        name = DEFAULT_PLUGIN_NAME
        version = DEFAULT_PLUGIN_VERSION
        package = DEFAULT_PLUGIN_PACKAGE

    descriptor = PluginDescriptor(
        name=name,
        version=version,
        package=package,
        data_file=data_file,
        uses_data=uses_data,
    )
    logger.debug(f"Extracted plugin metadata: {descriptor}")
    return descriptor
