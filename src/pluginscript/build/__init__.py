"""Artifact writing and the javac/jar build driver."""

from pluginscript.build.driver import BuildDriver, BuildReport, StepResult
from pluginscript.build.writer import WriteReport, write_artifacts

__all__ = [
    "BuildDriver",
    "BuildReport",
    "StepResult",
    "WriteReport",
    "write_artifacts",
]
