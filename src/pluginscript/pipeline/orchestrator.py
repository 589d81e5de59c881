"""
Compilation orchestrator.

One code path from a DSL file to a plugin jar, shared by every CLI command:

    read -> extract (metadata, commands, events) -> rewrite -> emit -> write -> build

Extraction always runs on the raw text; the rewrite pipeline then rewrites
the whole document once, and the rewritten bodies are attached back onto the
extracted definitions before emission. Hard failures (unreadable source, no
commands) raise before anything is written; everything after that point
only logs.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from pluginscript.build.driver import BuildDriver, BuildReport
from pluginscript.build.writer import WriteReport, write_artifacts
from pluginscript.config import Settings, settings
from pluginscript.emitter.builders import CompiledPlugin, emit_plugin
from pluginscript.exceptions import SourceReadError
from pluginscript.extraction import commands as command_extraction
from pluginscript.extraction import events as event_extraction
from pluginscript.extraction.metadata import extract_metadata
from pluginscript.models.definitions import (
    CommandDefinition,
    EventDefinition,
    PluginDescriptor,
)
from pluginscript.rewriting.pipeline import RewritePipeline, RewriteResult

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    """Stages reported to progress callbacks, in execution order."""

    EXTRACT = "extract"
    REWRITE = "rewrite"
    EMIT = "emit"
    WRITE = "write"
    COMPILE = "compile"
    CLEAN = "clean"
    ARCHIVE = "archive"

    @property
    def progress(self) -> float:
        return STAGE_PROGRESS[self]

    @property
    def label(self) -> str:
        return STAGE_LABELS[self]


STAGE_PROGRESS = {
    Stage.EXTRACT: 0.1,
    Stage.REWRITE: 0.25,
    Stage.EMIT: 0.4,
    Stage.WRITE: 0.6,
    Stage.COMPILE: 0.8,
    Stage.CLEAN: 0.9,
    Stage.ARCHIVE: 1.0,
}

STAGE_LABELS = {
    Stage.EXTRACT: "Converting classes",
    Stage.REWRITE: "Converting classes",
    Stage.EMIT: "Converting classes",
    Stage.WRITE: "Converting classes",
    Stage.COMPILE: "Compiling classes",
    Stage.CLEAN: "Compiling classes",
    Stage.ARCHIVE: "Generating .jar",
}

StageCallback = Callable[[Stage], None]


@dataclass
class Translation:
    """In-memory result of translating one DSL document."""

    descriptor: PluginDescriptor
    commands: list[CommandDefinition]
    events: list[EventDefinition]
    rewrite: RewriteResult
    compiled: CompiledPlugin


@dataclass
class CompileOutcome:
    """Result of compile_file for CLI callers."""

    translation: Translation
    output_dir: Path
    write_report: WriteReport
    build_report: Optional[BuildReport]
    elapsed_seconds: float

    @property
    def ok(self) -> bool:
        build_ok = self.build_report.ok if self.build_report else True
        return self.write_report.ok and build_ok


def read_source(path: Path) -> str:
    """
    Read a DSL document.

    Raises:
        SourceReadError: If the file cannot be read or decoded
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(path, str(e)) from e


def translate_source(
    source: str,
    source_name: Optional[str] = None,
    pipeline: Optional[RewritePipeline] = None,
    on_stage: Optional[StageCallback] = None,
) -> Translation:
    """
    Translate DSL text into an emitted plugin without touching the file system.

    Raises:
        NoCommandsError: If the document declares no commands
    """

    def _notify(stage: Stage) -> None:
        if on_stage:
            on_stage(stage)

    _notify(Stage.EXTRACT)
    descriptor = extract_metadata(source)
    commands = command_extraction.extract_commands(source, source_name)
    events = event_extraction.extract_events(source)

    _notify(Stage.REWRITE)
    result = (pipeline or RewritePipeline()).run(source)
    command_extraction.attach_rewritten_bodies(commands, result.text)
    event_extraction.attach_rewritten_bodies(events, result.text)

    _notify(Stage.EMIT)
    compiled = emit_plugin(descriptor, commands, events, result)

    return Translation(
        descriptor=descriptor,
        commands=commands,
        events=events,
        rewrite=result,
        compiled=compiled,
    )


def compile_file(
    source_path: Path,
    output_dir: Optional[Path] = None,
    build: bool = True,
    config: Optional[Settings] = None,
    on_stage: Optional[StageCallback] = None,
) -> CompileOutcome:
    """
    Translate a DSL file, write its artifacts and build the jar.

    Args:
        source_path: DSL document to compile
        output_dir: Output root (defaults to the configured output dir)
        build: Run javac/jar after writing the sources
        config: Settings to use (defaults to the global settings)
        on_stage: Progress callback, called before each stage

    Returns:
        CompileOutcome; write and build problems are reported, not raised

    Raises:
        SourceReadError: If the source cannot be read
        NoCommandsError: If the source declares no commands
    """
    config = config or settings
    output_dir = output_dir or config.output_path
    start = time.monotonic()

    source = read_source(source_path)
    translation = translate_source(source, source_path.name, on_stage=on_stage)

    if on_stage:
        on_stage(Stage.WRITE)
    write_report = write_artifacts(translation.compiled, output_dir)

    build_report = None
    if build:
        driver = BuildDriver(config)
        build_report = driver.build(
            translation.compiled,
            output_dir,
            on_step=(lambda step: on_stage(Stage(step))) if on_stage else None,
        )

    elapsed = time.monotonic() - start
    logger.info(f"Compiled {source_path} in {elapsed:.2f}s")
    return CompileOutcome(
        translation=translation,
        output_dir=output_dir,
        write_report=write_report,
        build_report=build_report,
        elapsed_seconds=elapsed,
    )
