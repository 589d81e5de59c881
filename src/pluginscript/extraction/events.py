"""
Event declaration extraction.

Event names map onto Bukkit event classes through a closed table; the
package is chosen by name prefix. Names outside the table are not an error:
they degrade to the generic `org.bukkit.event.Event`.
"""

import logging

from pluginscript.extraction.base import declaration_pattern, scan_declarations
from pluginscript.models.definitions import EventDefinition

logger = logging.getLogger(__name__)

EVENT_PATTERN = declaration_pattern("event", parameter=r"[^)]+?")

EVENT_TYPES: dict[str, str] = {
    "playerJoin": "PlayerJoinEvent",
    "playerQuit": "PlayerQuitEvent",
    "blockBreak": "BlockBreakEvent",
    "blockPlace": "BlockPlaceEvent",
    "entityDamage": "EntityDamageEvent",
}

EVENT_PACKAGE_PREFIXES: tuple[tuple[str, str], ...] = (
    ("player", "org.bukkit.event.player"),
    ("block", "org.bukkit.event.block"),
    ("entity", "org.bukkit.event.entity"),
)

GENERIC_EVENT_TYPE = "Event"
GENERIC_EVENT_PACKAGE = "org.bukkit.event"


def event_package_for(name: str) -> str:
    for prefix, package in EVENT_PACKAGE_PREFIXES:
        if name.startswith(prefix):
            return package
    return GENERIC_EVENT_PACKAGE


def resolve_event_type(name: str) -> tuple[str, str]:
    """
    Map a DSL event name to (class name, package).

    Unknown names resolve to the generic event type.
    """
    event_type = EVENT_TYPES.get(name)
    if event_type is None:
        logger.warning(
            f"Unknown event '{name}', falling back to "
            f"{GENERIC_EVENT_PACKAGE}.{GENERIC_EVENT_TYPE}"
        )
        return GENERIC_EVENT_TYPE, GENERIC_EVENT_PACKAGE
    return event_type, event_package_for(name)


def extract_events(source: str) -> list[EventDefinition]:
    """Find every event declaration in a DSL document, in source order."""
    events = []
    for declaration in scan_declarations(EVENT_PATTERN, source):
        event_type, event_package = resolve_event_type(declaration.name)
        events.append(
            EventDefinition(
                name=declaration.name,
                parameter=declaration.parameter,
                body=declaration.body,
                event_type=event_type,
                event_package=event_package,
            )
        )
    logger.info(f"Extracted {len(events)} event handler(s)")
    return events


def attach_rewritten_bodies(
    events: list[EventDefinition], rewritten_source: str
) -> None:
    """Copy rewritten bodies onto event definitions, pairing by position."""
    declarations = scan_declarations(EVENT_PATTERN, rewritten_source)
    if len(declarations) != len(events):
        logger.warning(
            f"Rewritten source has {len(declarations)} event declaration(s), "
            f"expected {len(events)}; unmatched events keep their raw body"
        )
    for event, declaration in zip(events, declarations):
        event.rewritten_body = declaration.body
