"""
Command declaration extraction.

A script must declare at least one command; a document without any is
rejected before anything is emitted.
"""

import logging
import re
from typing import Optional

from pluginscript.exceptions import NoCommandsError
from pluginscript.extraction.base import declaration_pattern, scan_declarations
from pluginscript.models.definitions import (
    DEFAULT_COMMAND_DESCRIPTION,
    CommandDefinition,
)

logger = logging.getLogger(__name__)

COMMAND_PATTERN = declaration_pattern("command")
DESCRIPTION_PATTERN = re.compile(r"\bdescription\(\"([^\"]+)\"\);?")


def split_description(body: str) -> tuple[Optional[str], str]:
    """
    Pull the first `description("...")` call out of a command body.

    Returns:
        (description text or None, body with that call removed)
    """
    match = DESCRIPTION_PATTERN.search(body)
    if not match:
        return None, body
    return match.group(1), body[: match.start()] + body[match.end() :]


def extract_commands(
    source: str, source_name: Optional[str] = None
) -> list[CommandDefinition]:
    """
    Find every command declaration in a DSL document.

    Args:
        source: Raw DSL text
        source_name: Optional file name used in the error message

    Returns:
        Command definitions in source order. Duplicate names are kept here;
        the emitter decides which one wins.

    Raises:
        NoCommandsError: If the document declares no commands
    """
    declarations = scan_declarations(COMMAND_PATTERN, source)
    if not declarations:
        raise NoCommandsError(source_name)

    commands = []
    for declaration in declarations:
        description, body = split_description(declaration.body)
        commands.append(
            CommandDefinition(
                name=declaration.name,
                parameter=declaration.parameter,
                body=body,
                description=description or DEFAULT_COMMAND_DESCRIPTION,
            )
        )
        logger.debug(f"Found command '{declaration.name}'")

    logger.info(f"Extracted {len(commands)} command(s)")
    return commands


def attach_rewritten_bodies(
    commands: list[CommandDefinition], rewritten_source: str
) -> None:
    """
    Copy the rewritten body of each command onto its definition.

    The rewritten document is scanned with the same pattern as the raw one and
    the matches are paired with the definitions by position.
    """
    declarations = scan_declarations(COMMAND_PATTERN, rewritten_source)
    if len(declarations) != len(commands):
        logger.warning(
            f"Rewritten source has {len(declarations)} command declaration(s), "
            f"expected {len(commands)}; unmatched commands keep their raw body"
        )
    for command, declaration in zip(commands, declarations):
        _, command.rewritten_body = split_description(declaration.body)
