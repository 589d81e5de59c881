"""
Declaration extractors for plugin scripts.

Each extractor is an independent read-only scan over the raw DSL text:
plugin metadata, command declarations and event declarations.
"""

from pluginscript.extraction.commands import extract_commands
from pluginscript.extraction.events import extract_events, resolve_event_type
from pluginscript.extraction.metadata import extract_metadata

__all__ = [
    "extract_commands",
    "extract_events",
    "extract_metadata",
    "resolve_event_type",
]
