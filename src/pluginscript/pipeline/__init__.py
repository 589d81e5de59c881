"""End-to-end compilation: source file to plugin jar."""

from pluginscript.pipeline.orchestrator import (
    CompileOutcome,
    Stage,
    Translation,
    compile_file,
    read_source,
    translate_source,
)

__all__ = [
    "CompileOutcome",
    "Stage",
    "Translation",
    "compile_file",
    "read_source",
    "translate_source",
]
