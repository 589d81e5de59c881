"""Builders that turn extracted definitions into the plugin's Java IR and manifest."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Sequence, TypeVar

from pluginscript.emitter import templates
from pluginscript.emitter.ir import JavaClass, JavaMethod, format_block, indent
from pluginscript.emitter.manifest import CommandEntry, PluginManifest
from pluginscript.models.definitions import (
    CommandDefinition,
    EventDefinition,
    PluginDescriptor,
)
from pluginscript.rewriting.pipeline import RewriteResult

logger = logging.getLogger(__name__)

MANIFEST_FILE = "plugin.yml"
MAIN_CLASS_NAME = "Main"
DISPATCH_SIGNATURE = (
    "public boolean onCommand(CommandSender sender, Command command, "
    "String label, String[] args)"
)
BARE_RETURN_PATTERN = re.compile(r"\breturn\s*;")

Definition = TypeVar("Definition", CommandDefinition, EventDefinition)


def first_wins(definitions: Sequence[Definition], kind: str) -> list[Definition]:
    """
    Drop definitions whose name was already declared.

    The first declaration of a name is kept, matching which branch the
    generated dispatch would reach first.
    """
    kept: list[Definition] = []
    seen: set[str] = set()
    for definition in definitions:
        if definition.name in seen:
            logger.warning(
                f"Duplicate {kind} '{definition.name}' ignored; "
                f"the first declaration wins"
            )
            continue
        seen.add(definition.name)
        kept.append(definition)
    return kept


def command_statements(command: CommandDefinition) -> str:
    """Body of a command branch: `return;` becomes `return true;`."""
    body = format_block(BARE_RETURN_PATTERN.sub("return true;", command.effective_body))
    if command.parameter != "sender":
        body = f"CommandSender {command.parameter} = sender;\n{body}"
    return body


def dispatch_branch(command: CommandDefinition) -> str:
    statements = command_statements(command)
    lines = [f'if (command.getName().equalsIgnoreCase("{command.name}")) {{']
    if statements:
        lines.append(indent(statements))
    lines.append(indent("return true;"))
    lines.append("}")
    return "\n".join(lines)


def dispatch_method(commands: Sequence[CommandDefinition]) -> JavaMethod:
    """onCommand matching the invoked name case-insensitively against each command."""
    blocks = [dispatch_branch(command) for command in commands]
    blocks.append("return false;")
    return JavaMethod(
        signature=DISPATCH_SIGNATURE,
        body="\n\n".join(blocks),
        annotations=["Override"],
    )


def event_method(event: EventDefinition) -> JavaMethod:
    return JavaMethod(
        signature=(
            f"public void {event.method_name}"
            f"({event.qualified_type} {event.parameter})"
        ),
        body=format_block(event.effective_body),
        annotations=["EventHandler"],
    )


def build_manifest(
    descriptor: PluginDescriptor, commands: Sequence[CommandDefinition]
) -> PluginManifest:
    return PluginManifest(
        name=descriptor.name,
        version=descriptor.version,
        main=descriptor.main_class,
        commands=[
            CommandEntry(
                name=command.name,
                description=command.description,
                usage=command.usage,
            )
            for command in commands
        ],
    )


class MainClassBuilder:
    """Build the plugin entry point: data handler, dispatch, listeners and helpers."""

    def __init__(self, descriptor: PluginDescriptor, rewrite: RewriteResult):
        self.descriptor = descriptor
        self.rewrite = rewrite

    @property
    def needs_json_library(self) -> bool:
        return self.descriptor.uses_data or self.rewrite.uses_json_parse

    def build(
        self,
        commands: Sequence[CommandDefinition],
        events: Sequence[EventDefinition],
    ) -> JavaClass:
        main = JavaClass(
            package=self.descriptor.package,
            name=MAIN_CLASS_NAME,
            extends="JavaPlugin",
            implements=["CommandExecutor", "Listener"],
        )
        self._add_imports(main)

        if self.descriptor.uses_data:
            main.add_member(templates.data_handler_block(self.descriptor))
        if self.rewrite.uses_description:
            main.add_member(templates.description_method())

        main.add_member(
            JavaMethod(
                signature="public void onEnable()",
                body=(
                    'getLogger().info("Plugin enabled!");\n'
                    "getServer().getPluginManager().registerEvents(this, this);"
                ),
                annotations=["Override"],
            )
        )
        main.add_member(dispatch_method(commands))

        for event in events:
            main.add_member(event_method(event))

        if self.rewrite.uses_fetch:
            main.add_member(templates.fetch_method())
        if self.rewrite.uses_json_parse:
            main.add_member(templates.parse_json_method())

        return main

    def _add_imports(self, main: JavaClass) -> None:
        main.add_import(*templates.BASE_IMPORTS)
        if self.needs_json_library:
            main.add_import(*templates.JSON_IMPORTS)
        if self.needs_json_library or self.rewrite.uses_fetch:
            main.add_import(*templates.FILE_IMPORTS)
        if self.rewrite.uses_fetch:
            main.add_import(*templates.FETCH_IMPORTS)


def build_command_class(
    descriptor: PluginDescriptor, command: CommandDefinition
) -> JavaClass:
    """Standalone executor repeating the command's dispatch branch."""
    return JavaClass(
        package=descriptor.package,
        name=command.class_name,
        imports=list(templates.COMMAND_CLASS_IMPORTS),
        implements=["CommandExecutor"],
        members=[dispatch_method([command])],
    )


@dataclass
class SourceFile:
    """One emitted artifact, relative to the output directory."""

    relative_path: PurePosixPath
    content: str


@dataclass
class CompiledPlugin:
    """Everything the emitter produced for one script."""

    descriptor: PluginDescriptor
    manifest: PluginManifest
    main_class: JavaClass
    command_classes: list[JavaClass] = field(default_factory=list)
    needs_json_library: bool = False

    @property
    def main_source_path(self) -> PurePosixPath:
        return PurePosixPath(self.descriptor.package_path, self.main_class.file_name)

    def source_files(self) -> list[SourceFile]:
        """Artifacts in write order: command classes, manifest, main class."""
        files = [
            SourceFile(
                PurePosixPath(self.descriptor.package_path, java_class.file_name),
                java_class.render(),
            )
            for java_class in self.command_classes
        ]
        files.append(SourceFile(PurePosixPath(MANIFEST_FILE), self.manifest.to_yaml()))
        files.append(SourceFile(self.main_source_path, self.main_class.render()))
        return files


def emit_plugin(
    descriptor: PluginDescriptor,
    commands: Sequence[CommandDefinition],
    events: Sequence[EventDefinition],
    rewrite: RewriteResult,
) -> CompiledPlugin:
    """
    Assemble the manifest, main class and per-command classes.

    Args:
        descriptor: Plugin identity
        commands: Command definitions with rewritten bodies attached
        events: Event definitions with rewritten bodies attached
        rewrite: Pipeline result providing the capability flags

    Returns:
        CompiledPlugin ready to be written to disk
    """
    unique_commands = first_wins(commands, "command")
    unique_events = first_wins(events, "event")

    builder = MainClassBuilder(descriptor, rewrite)
    compiled = CompiledPlugin(
        descriptor=descriptor,
        manifest=build_manifest(descriptor, unique_commands),
        main_class=builder.build(unique_commands, unique_events),
        command_classes=[
            build_command_class(descriptor, command) for command in unique_commands
        ],
        needs_json_library=builder.needs_json_library,
    )
    logger.info(
        f"Emitted {descriptor.main_class} with {len(unique_commands)} command(s) "
        f"and {len(unique_events)} event handler(s)"
    )
    return compiled
