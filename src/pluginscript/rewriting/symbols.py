"""Run-scoped identifier classification and capability state."""

from dataclasses import dataclass, field
from enum import Enum


class Registry(str, Enum):
    """Identifier classifications recorded by rewrite rules."""

    LISTS = "lists"
    """Bound from `data.getArray(...)`; bracket access becomes `.get(i)`."""

    JSON_OBJECTS = "json_objects"
    """Bound from `JSON.parse(...)`; property access becomes `.get("name")`."""


class Capability(str, Enum):
    """Features whose helpers and imports the emitter adds on demand."""

    FETCH = "fetch"
    JSON_PARSE = "json_parse"
    DESCRIPTION = "description"


@dataclass
class SymbolTable:
    """Identifiers classified so far in one pipeline run."""

    lists: set[str] = field(default_factory=set)
    json_objects: set[str] = field(default_factory=set)

    def register(self, registry: Registry, name: str) -> None:
        self._names(registry).add(name)

    def contains(self, registry: Registry, name: str) -> bool:
        return name in self._names(registry)

    def is_list(self, name: str) -> bool:
        return name in self.lists

    def is_json_object(self, name: str) -> bool:
        return name in self.json_objects

    def _names(self, registry: Registry) -> set[str]:
        if registry == Registry.LISTS:
            return self.lists
        return self.json_objects


@dataclass
class RewriteState:
    """
    Mutable state threaded through the rules of a single pipeline run.

    A new instance is created for every run, so classifications never carry
    over from one document to the next.
    """

    symbols: SymbolTable = field(default_factory=SymbolTable)
    capabilities: set[Capability] = field(default_factory=set)
    raw_blocks: list[str] = field(default_factory=list)
