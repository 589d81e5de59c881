"""
pluginscript - compile JavaScript-style plugin scripts into Bukkit plugins.

The translation core lives in three layers: extraction of declarations,
the ordered rewrite pipeline, and the Java emitter. The build package and
CLI wrap them with file output, javac/jar and progress reporting.
"""

from pluginscript.pipeline.orchestrator import compile_file, translate_source
from pluginscript.rewriting.pipeline import RewritePipeline, rewrite

__all__ = [
    "__version__",
    "RewritePipeline",
    "compile_file",
    "rewrite",
    "translate_source",
]

__version__ = "0.1.0"
