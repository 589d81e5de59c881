"""
Raw target-language regions.

Text between `$^` and `^$` is written to the generated source as-is. The
region is lifted out of the document before any rewrite rule runs, parked
behind an inert placeholder, and spliced back at the very end. On the way
back its lines are dedented and re-indented to the indentation of the line
the placeholder sits on, so raw statements line up with their neighbours.

Only the first pass is protected: restored text is plain Java, so feeding
the output through the pipeline again exposes it to the rules.
"""

import re
import textwrap

RAW_BLOCK_PATTERN = re.compile(r"\$\^(.*?)\^\$", re.DOTALL)
PLACEHOLDER_TEMPLATE = "__RAW_BLOCK_{index}__"
LEADING_WHITESPACE = re.compile(r"[ \t]*")


def lift_raw_blocks(text: str, blocks: list[str]) -> str:
    """Replace each raw region with a placeholder, appending its content to `blocks`."""

    def _park(match: re.Match) -> str:
        blocks.append(match.group(1))
        return PLACEHOLDER_TEMPLATE.format(index=len(blocks) - 1)

    return RAW_BLOCK_PATTERN.sub(_park, text)


def reindent(content: str, indent: str = "") -> str:
    """
    Dedent `content` and prefix every line after the first with `indent`.

    The first line is not prefixed: it replaces the placeholder, which
    already sits after the line's indentation.
    """
    lines = textwrap.dedent(content.strip("\n")).strip().split("\n")
    return ("\n" + indent).join(lines)


def escape_template(content: str) -> str:
    """
    Escape text for use as an `re.sub` replacement template.

    Backslashes are the only metacharacter in Python replacement strings
    (`\\1`, `\\g<name>`, `\\n`); doubling them makes the substitution insert
    the text literally.
    """
    return content.replace("\\", "\\\\")


def line_indent(text: str, position: int) -> str:
    """Leading whitespace of the line containing `position`."""
    line_start = text.rfind("\n", 0, position) + 1
    return LEADING_WHITESPACE.match(text, line_start).group(0)


def restore_raw_blocks(text: str, blocks: list[str]) -> str:
    """Splice lifted regions back in place of their placeholders."""
    for index, content in enumerate(blocks):
        placeholder = re.compile(re.escape(PLACEHOLDER_TEMPLATE.format(index=index)))
        match = placeholder.search(text)
        if match is None:
            continue
        indent = line_indent(text, match.start())
        text = placeholder.sub(escape_template(reindent(content, indent)), text, count=1)
    return text
