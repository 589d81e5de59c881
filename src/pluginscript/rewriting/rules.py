"""
Rewrite rules that turn DSL idioms into Java.

Every rule is a text -> text function over the whole document. Rules run
once each, in the order of DEFAULT_RULES. Some rules record identifiers in
the run's symbol table and later rules consult it, so the order is part of
the contract: each rule declares the registries it writes (`registers`) and
reads (`requires`), and the pipeline refuses an order in which a rule reads
a registry nothing before it has written.

A rule only matches DSL surface syntax, never its own output, which is what
makes a second pass over rewritten text a no-op. The exception is raw
`$^ ... ^$` regions: they are shielded only on the pass that lifts them, so
raw Java that happens to look like a DSL idiom (`if (!x)`, `.push(`) is
rewritten if the output is fed through the pipeline again.
"""

import re
from dataclasses import dataclass
from typing import Callable

from pluginscript.rewriting.raw_blocks import lift_raw_blocks, restore_raw_blocks
from pluginscript.rewriting.symbols import Capability, Registry, RewriteState

NAME = r"[a-zA-Z0-9_]+"

RuleFn = Callable[[str, RewriteState], str]

# Property names that stay method/field access even on parsed JSON objects
RESERVED_METHOD_NAMES = frozenset(
    {
        "toLowerCase",
        "toUpperCase",
        "split",
        "equals",
        "substring",
        "toString",
        "isEmpty",
        "size",
        "length",
        "add",
        "push",
        "replaceAll",
        "join",
    }
)


@dataclass(frozen=True)
class RewriteRule:
    """One ordered step of the rewrite pipeline."""

    name: str
    apply: RuleFn
    registers: frozenset[Registry] = frozenset()
    requires: frozenset[Registry] = frozenset()


# Raw regions


def lift_raw_regions(text: str, state: RewriteState) -> str:
    return lift_raw_blocks(text, state.raw_blocks)


def restore_raw_regions(text: str, state: RewriteState) -> str:
    return restore_raw_blocks(text, state.raw_blocks)


# Detection


def detect_network_and_json(text: str, state: RewriteState) -> str:
    if "fetch(" in text:
        state.capabilities.add(Capability.FETCH)
    if "JSON.parse(" in text:
        state.capabilities.add(Capability.JSON_PARSE)
    return text


def detect_description(text: str, state: RewriteState) -> str:
    if "description(" in text:
        state.capabilities.add(Capability.DESCRIPTION)
    return text


# Logging

CONSOLE_CALL_PATTERN = re.compile(r"\bconsole\.(log|error|warn)\(")
LOGGER_METHODS = {"log": "info", "error": "severe", "warn": "warning"}


def rewrite_console_calls(text: str, state: RewriteState) -> str:
    return CONSOLE_CALL_PATTERN.sub(
        lambda m: f"getLogger().{LOGGER_METHODS[m.group(1)]}(", text
    )


# Template literals

TEMPLATE_LITERAL_PATTERN = re.compile(r"`([^`]*)`")
TEMPLATE_HOLE_PATTERN = re.compile(r"\$\{(.*?)\}", re.DOTALL)


def _string_literal(segment: str) -> str:
    return '"' + segment.replace('"', '\\"') + '"'


def interpolate_template(content: str) -> str:
    """`a${x}b${y}c` -> "a" + (x) + "b" + (y) + "c"."""
    pieces = TEMPLATE_HOLE_PATTERN.split(content)
    parts = [_string_literal(pieces[0])]
    for expr, segment in zip(pieces[1::2], pieces[2::2]):
        parts.append(f"({expr})")
        parts.append(_string_literal(segment))
    return " + ".join(parts)


def rewrite_template_literals(text: str, state: RewriteState) -> str:
    def _replace(match: re.Match) -> str:
        content = match.group(1)
        if "${" not in content:
            return match.group(0)
        return interpolate_template(content)

    return TEMPLATE_LITERAL_PATTERN.sub(_replace, text)


# Bindings

SLICE_JOIN_PATTERN = re.compile(
    rf"\blet\s+({NAME})\s*=\s*args\.slice\((\d+)\)\.join\(\"([^\"]*)\"\);"
)


def rewrite_slice_join(text: str, state: RewriteState) -> str:
    return SLICE_JOIN_PATTERN.sub(
        lambda m: (
            f'String {m.group(1)} = String.join("{m.group(3)}", '
            f"java.util.Arrays.copyOfRange(args, {m.group(2)}, args.length));"
        ),
        text,
    )


DATA_GET_ARRAY_PATTERN = re.compile(rf"\blet\s+({NAME})\s*=\s*data\.getArray\(")


def rewrite_data_get_array(text: str, state: RewriteState) -> str:
    def _replace(match: re.Match) -> str:
        name = match.group(1)
        state.symbols.register(Registry.LISTS, name)
        return f"List<String> {name} = data.getArray("

    return DATA_GET_ARRAY_PATTERN.sub(_replace, text)


GET_SERVER_PATTERN = re.compile(rf"\blet\s+({NAME})\s*=\s*sender\.getServer\(\);")
GET_PLAYER_EXACT_PATTERN = re.compile(
    rf"\blet\s+({NAME})\s*=\s*({NAME})\.getPlayerExact\("
)
GET_PLAYER_PATTERN = re.compile(rf"\blet\s+({NAME})\s*=\s*({NAME})\.getPlayer\(\s*\);")


def rewrite_server_and_player_bindings(text: str, state: RewriteState) -> str:
    text = GET_SERVER_PATTERN.sub(r"Server \1 = sender.getServer();", text)
    text = GET_PLAYER_EXACT_PATTERN.sub(r"Player \1 = \2.getPlayerExact(", text)
    return GET_PLAYER_PATTERN.sub(r"Player \1 = \2.getPlayer();", text)


# Conditions

IF_NOT_PATTERN = re.compile(rf"\bif\s*\(\s*!({NAME})\s*\)")


def rewrite_if_not(text: str, state: RewriteState) -> str:
    # Narrower than truthiness on purpose: only null or empty string.
    return IF_NOT_PATTERN.sub(r"if (\1 == null || \1.isEmpty())", text)


IGNORE_CASE_EQUALS_PATTERN = re.compile(
    rf"({NAME})\.toLowerCase\(\)\s*===\s*({NAME})\.toLowerCase\(\)"
)


def rewrite_ignore_case_equals(text: str, state: RewriteState) -> str:
    return IGNORE_CASE_EQUALS_PATTERN.sub(
        r"\1.toLowerCase().equals(\2.toLowerCase())", text
    )


# Lists and arrays

PUSH_PATTERN = re.compile(r"\.push\(")


def rewrite_push(text: str, state: RewriteState) -> str:
    return PUSH_PATTERN.sub(".add(", text)


DATA_SET_ARRAY_PATTERN = re.compile(r"\bdata\.set\(\"([^\"]+)\"\s*,\s*\[([^\]]+)\]\)")


def rewrite_data_set_array(text: str, state: RewriteState) -> str:
    def _replace(match: re.Match) -> str:
        items = ", ".join(item.strip() for item in match.group(2).strip().split(","))
        return f'data.setArray("{match.group(1)}", java.util.Arrays.asList({items}))'

    return DATA_SET_ARRAY_PATTERN.sub(_replace, text)


SPLIT_PATTERN = re.compile(
    rf"\blet\s+({NAME})\s*=\s*({NAME})\.split\(\"([^\"]+)\"\)\s*;"
)


def rewrite_split(text: str, state: RewriteState) -> str:
    return SPLIT_PATTERN.sub(r'String[] \1 = \2.split("\3");', text)


FOR_LENGTH_PATTERN = re.compile(
    rf"\bfor\s*\(let\s+(\w+)\s*=\s*(\d+);\s*\1\s*<\s*({NAME})\.length;\s*\1\+\+\)\s*\{{"
)
BRACKET_INDEX_PATTERN = re.compile(rf"({NAME})\s*\[\s*({NAME})\s*\]")


def rewrite_list_loops_and_indexing(text: str, state: RewriteState) -> str:
    text = FOR_LENGTH_PATTERN.sub(r"for (int \1 = \2; \1 < \3.size(); \1++) {", text)

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if state.symbols.is_list(name):
            return f"{name}.get({match.group(2)})"
        return match.group(0)

    return BRACKET_INDEX_PATTERN.sub(_replace, text)


# Network and JSON

# Argument text with at most one level of nested parentheses: url(id), not a(b(c))
CALL_ARGUMENT = r"((?:[^()]|\([^()]*\))+)"

FETCH_PATTERN = re.compile(rf"\blet\s+({NAME})\s*=\s*fetch\({CALL_ARGUMENT}\);?")


def rewrite_fetch(text: str, state: RewriteState) -> str:
    return FETCH_PATTERN.sub(
        lambda m: f"String {m.group(1)} = fetch({m.group(2).strip()});", text
    )


JSON_PARSE_PATTERN = re.compile(
    rf"\blet\s+({NAME})\s*=\s*JSON\.parse\({CALL_ARGUMENT}\);?"
)


def rewrite_json_parse(text: str, state: RewriteState) -> str:
    def _replace(match: re.Match) -> str:
        name = match.group(1)
        state.symbols.register(Registry.JSON_OBJECTS, name)
        return f"JSONObject {name} = parseJson({match.group(2).strip()});"

    return JSON_PARSE_PATTERN.sub(_replace, text)


PROPERTY_ACCESS_PATTERN = re.compile(rf"({NAME})\.({NAME})")


def rewrite_json_property_access(text: str, state: RewriteState) -> str:
    # Classification is by name only, so a shadowed or reused name is misread.
    def _replace(match: re.Match) -> str:
        obj, prop = match.group(1), match.group(2)
        if state.symbols.is_json_object(obj) and prop not in RESERVED_METHOD_NAMES:
            return f'{obj}.get("{prop}")'
        return match.group(0)

    return PROPERTY_ACCESS_PATTERN.sub(_replace, text)


# Remaining declarations

LET_PATTERN = re.compile(r"\blet\s+")


def rewrite_untyped_let(text: str, state: RewriteState) -> str:
    # Anything not retyped by an earlier rule is assumed to be a String.
    return LET_PATTERN.sub("String ", text)


EMPTY_ARRAY_PATTERN = re.compile(rf"\bString\s+({NAME})\s*=\s*\[\]\s*;")


def rewrite_empty_array(text: str, state: RewriteState) -> str:
    return EMPTY_ARRAY_PATTERN.sub(r"List<String> \1 = new ArrayList<>();", text)


LENGTH_ZERO_PATTERN = re.compile(rf"\bif\s*\(\s*({NAME})\.length\s*===\s*0\s*\)")


def rewrite_length_zero(text: str, state: RewriteState) -> str:
    return LENGTH_ZERO_PATTERN.sub(r"if (\1.isEmpty())", text)


DEFAULT_RULES: tuple[RewriteRule, ...] = (
    RewriteRule("lift_raw_regions", lift_raw_regions),
    RewriteRule("detect_network_and_json", detect_network_and_json),
    RewriteRule("console_calls", rewrite_console_calls),
    RewriteRule("detect_description", detect_description),
    RewriteRule("template_literals", rewrite_template_literals),
    RewriteRule("slice_join", rewrite_slice_join),
    RewriteRule(
        "data_get_array",
        rewrite_data_get_array,
        registers=frozenset({Registry.LISTS}),
    ),
    RewriteRule("server_and_player_bindings", rewrite_server_and_player_bindings),
    RewriteRule("if_not", rewrite_if_not),
    RewriteRule("ignore_case_equals", rewrite_ignore_case_equals),
    RewriteRule("push", rewrite_push),
    RewriteRule("data_set_array", rewrite_data_set_array),
    RewriteRule("split", rewrite_split),
    RewriteRule(
        "list_loops_and_indexing",
        rewrite_list_loops_and_indexing,
        requires=frozenset({Registry.LISTS}),
    ),
    RewriteRule("fetch", rewrite_fetch),
    RewriteRule(
        "json_parse",
        rewrite_json_parse,
        registers=frozenset({Registry.JSON_OBJECTS}),
    ),
    RewriteRule(
        "json_property_access",
        rewrite_json_property_access,
        requires=frozenset({Registry.JSON_OBJECTS}),
    ),
    RewriteRule("untyped_let", rewrite_untyped_let),
    RewriteRule("empty_array", rewrite_empty_array),
    RewriteRule("length_zero", rewrite_length_zero),
    RewriteRule("restore_raw_regions", restore_raw_regions),
)
