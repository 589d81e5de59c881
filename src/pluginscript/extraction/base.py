"""
Shared helpers for the declaration extractors.

Commands and events use the same surface form:

    keyword("name", (param) => { body })

Bodies are captured with a lazy match that stops at the first `}` followed
by `)`, so a body containing a nested `})` is truncated there. Such bodies
are reported with a warning rather than rejected.
"""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

IDENTIFIER = r"[a-zA-Z_][a-zA-Z0-9_]*"


def declaration_pattern(keyword: str, parameter: str = IDENTIFIER) -> re.Pattern:
    """
    Build the regex for a `keyword("name", (param) => { body })` declaration.

    Groups: 1 = name, 2 = parameter, 3 = body.
    """
    return re.compile(
        rf"\b{keyword}\(\s*\"([^\"]+)\"\s*,\s*\(\s*({parameter})\s*\)\s*=>\s*\{{(.*?)\}}\s*\)",
        re.DOTALL,
    )


@dataclass
class Declaration:
    """One matched declaration, before it is turned into a definition."""

    name: str
    parameter: str
    body: str


def scan_declarations(pattern: re.Pattern, source: str) -> list[Declaration]:
    """Return every declaration matched by `pattern`, in source order."""
    declarations = []
    for match in pattern.finditer(source):
        name, parameter, body = match.group(1), match.group(2).strip(), match.group(3)
        if has_unbalanced_braces(body):
            logger.warning(
                f"Body of '{name}' has unbalanced braces; nested blocks ending in "
                f"'}})' are not supported and the body may be truncated"
            )
        declarations.append(Declaration(name=name, parameter=parameter, body=body))
    return declarations


def has_unbalanced_braces(body: str) -> bool:
    return body.count("{") != body.count("}")
