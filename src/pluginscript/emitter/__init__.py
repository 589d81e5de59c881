"""
Java code emitter.

Assembles extracted definitions and rewritten bodies into an intermediate
representation (JavaClass, JavaMethod, PluginManifest) and renders it to the
plugin's source files and plugin.yml.
"""

from pluginscript.emitter.builders import (
    CompiledPlugin,
    MainClassBuilder,
    SourceFile,
    build_command_class,
    build_manifest,
    emit_plugin,
)
from pluginscript.emitter.ir import JavaClass, JavaMethod
from pluginscript.emitter.manifest import CommandEntry, PluginManifest

__all__ = [
    "CommandEntry",
    "CompiledPlugin",
    "JavaClass",
    "JavaMethod",
    "MainClassBuilder",
    "PluginManifest",
    "SourceFile",
    "build_command_class",
    "build_manifest",
    "emit_plugin",
]
