"""
The rewrite pipeline.

Runs the ordered rule list over a whole DSL document with a fresh
RewriteState per run and reports the rewritten text together with the
capability flags and identifier classifications the emitter needs.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from pluginscript.rewriting.rules import DEFAULT_RULES, RewriteRule
from pluginscript.rewriting.symbols import Capability, RewriteState, SymbolTable

logger = logging.getLogger(__name__)


@dataclass
class RewriteResult:
    """
    Output of one pipeline run.

    Attributes:
        text: Fully rewritten document
        symbols: Final identifier classifications
        capabilities: Capability flags raised by detection rules
        applied_rules: Names of the rules that changed the text, in order
    """

    text: str
    symbols: SymbolTable
    capabilities: set[Capability] = field(default_factory=set)
    applied_rules: list[str] = field(default_factory=list)

    @property
    def uses_fetch(self) -> bool:
        return Capability.FETCH in self.capabilities

    @property
    def uses_json_parse(self) -> bool:
        return Capability.JSON_PARSE in self.capabilities

    @property
    def uses_description(self) -> bool:
        return Capability.DESCRIPTION in self.capabilities


class RewritePipeline:
    """
    Ordered list of rewrite rules.

    Example:
        >>> pipeline = RewritePipeline()
        >>> pipeline.run("let msg = `hi ${name}!`;").text
        'String msg = "hi " + (name) + "!";'
    """

    def __init__(self, rules: Optional[Sequence[RewriteRule]] = None) -> None:
        """
        Args:
            rules: Rules in application order (defaults to DEFAULT_RULES)

        Raises:
            ValueError: If a rule reads a registry no earlier rule writes,
                or two rules share a name
        """
        self.rules: list[RewriteRule] = list(DEFAULT_RULES if rules is None else rules)
        self._validate_order()

    def _validate_order(self) -> None:
        registered = set()
        seen_names = set()
        for rule in self.rules:
            if rule.name in seen_names:
                raise ValueError(f"Duplicate rewrite rule name: {rule.name}")
            seen_names.add(rule.name)

            missing = rule.requires - registered
            if missing:
                names = ", ".join(sorted(r.value for r in missing))
                raise ValueError(
                    f"Rule '{rule.name}' requires registries not populated by "
                    f"an earlier rule: {names}"
                )
            registered |= rule.registers

    def run(self, source: str) -> RewriteResult:
        """Apply every rule once, in order, to `source`."""
        state = RewriteState()
        applied: list[str] = []
        text = source

        for rule in self.rules:
            rewritten = rule.apply(text, state)
            if rewritten != text:
                applied.append(rule.name)
                logger.debug(f"Rule {rule.name} rewrote the document")
            text = rewritten

        logger.debug(
            f"Rewrite complete: {len(applied)} rule(s) applied, "
            f"lists={sorted(state.symbols.lists)}, "
            f"json_objects={sorted(state.symbols.json_objects)}"
        )
        return RewriteResult(
            text=text,
            symbols=state.symbols,
            capabilities=set(state.capabilities),
            applied_rules=applied,
        )


def rewrite(source: str) -> RewriteResult:
    """Run the default pipeline over `source`."""
    return RewritePipeline().run(source)
