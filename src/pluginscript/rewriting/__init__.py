"""
DSL-to-Java rewrite pipeline.

Converts script idioms into Java source text through an ordered list of
rules that share a run-scoped symbol table.
"""

from pluginscript.rewriting.pipeline import RewritePipeline, RewriteResult, rewrite
from pluginscript.rewriting.rules import (
    DEFAULT_RULES,
    RESERVED_METHOD_NAMES,
    RewriteRule,
)
from pluginscript.rewriting.symbols import (
    Capability,
    Registry,
    RewriteState,
    SymbolTable,
)

__all__ = [
    "DEFAULT_RULES",
    "RESERVED_METHOD_NAMES",
    "Capability",
    "Registry",
    "RewritePipeline",
    "RewriteResult",
    "RewriteRule",
    "RewriteState",
    "SymbolTable",
    "rewrite",
]
