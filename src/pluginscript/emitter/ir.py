"""
Intermediate representation for generated Java classes.

Builders assemble JavaClass/JavaMethod values; rendering to text happens in
one place so indentation and import handling stay consistent.
"""

import textwrap
from dataclasses import dataclass, field
from typing import Optional, Union

INDENT = "    "


def format_block(body: str) -> str:
    """Normalize a captured body: drop surrounding blank lines and common indentation."""
    return textwrap.dedent(body).strip("\n").rstrip()


def indent(text: str, levels: int = 1) -> str:
    return textwrap.indent(text, INDENT * levels)


@dataclass
class JavaMethod:
    """A method with its annotations, signature and (unindented) body."""

    signature: str
    body: str = ""
    annotations: list[str] = field(default_factory=list)

    def render(self) -> str:
        lines = [f"@{annotation}" for annotation in self.annotations]
        lines.append(f"{self.signature} {{")
        if self.body.strip():
            lines.append(indent(self.body))
        lines.append("}")
        return "\n".join(lines)


Member = Union[JavaMethod, str]


@dataclass
class JavaClass:
    """
    A top-level public class.

    Members are either JavaMethod values or verbatim blocks (fields, nested
    classes) that are dedented and re-indented when rendered.
    """

    package: str
    name: str
    imports: list[str] = field(default_factory=list)
    extends: Optional[str] = None
    implements: list[str] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)

    @property
    def file_name(self) -> str:
        return f"{self.name}.java"

    def add_import(self, *names: str) -> None:
        for name in names:
            if name not in self.imports:
                self.imports.append(name)

    def add_member(self, member: Member) -> None:
        self.members.append(member)

    def render(self) -> str:
        parts = [f"package {self.package};", ""]
        if self.imports:
            parts.extend(f"import {name};" for name in self.imports)
            parts.append("")

        declaration = f"public class {self.name}"
        if self.extends:
            declaration += f" extends {self.extends}"
        if self.implements:
            declaration += " implements " + ", ".join(self.implements)
        parts.append(declaration + " {")

        rendered_members = []
        for member in self.members:
            if isinstance(member, JavaMethod):
                text = member.render()
            else:
                text = format_block(member)
            rendered_members.append(indent(text))
        if rendered_members:
            parts.append("")
            parts.append("\n\n".join(rendered_members))
        parts.append("}")
        return "\n".join(parts) + "\n"
