"""
Compile and package the emitted plugin with the JDK tools.

Every step is a soft failure: a nonzero exit status or a missing tool is
logged and recorded in the BuildReport, and the following steps still run.
"""

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

from pluginscript.config import Settings, settings
from pluginscript.emitter.builders import CompiledPlugin

logger = logging.getLogger(__name__)

STEP_COMPILE = "compile"
STEP_CLEAN = "clean"
STEP_ARCHIVE = "archive"


@dataclass
class StepResult:
    """Outcome of one build step."""

    name: str
    ok: bool
    returncode: Optional[int] = None
    message: str = ""


@dataclass
class BuildReport:
    """Outcome of a full build."""

    steps: list[StepResult] = field(default_factory=list)
    jar_path: Optional[Path] = None

    @property
    def ok(self) -> bool:
        return all(step.ok for step in self.steps)

    @property
    def failed_steps(self) -> list[str]:
        return [step.name for step in self.steps if not step.ok]


class BuildDriver:
    """
    Runs javac and jar over an output directory.

    Example:
        >>> driver = BuildDriver()
        >>> report = driver.build(compiled, Path("output"))
        >>> report.jar_path
        PosixPath('output/MyPlugin.jar')
    """

    def __init__(self, config: Optional[Settings] = None) -> None:
        self.config = config or settings

    def _run(self, name: str, command: Sequence[str]) -> StepResult:
        logger.debug(f"Running {name}: {' '.join(command)}")
        try:
            completed = subprocess.run(
                list(command),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.error(f"Could not run {command[0]} for {name}: {e}")
            return StepResult(name=name, ok=False, message=str(e))

        for line in (completed.stdout or "").splitlines():
            logger.debug(f"{name}: {line}")

        if completed.returncode != 0:
            logger.error(f"{name} failed with exit code: {completed.returncode}")
            return StepResult(
                name=name,
                ok=False,
                returncode=completed.returncode,
                message=(completed.stdout or "").strip(),
            )
        return StepResult(name=name, ok=True, returncode=0)

    def compile(self, compiled: CompiledPlugin, output_dir: Path) -> StepResult:
        """Compile the main class into `output_dir`."""
        command = [self.config.javac_executable]
        if self.config.javac_verbose:
            command.append("-verbose")
        command += [
            "-d",
            str(output_dir),
            "-cp",
            self.config.build_classpath(output_dir, compiled.needs_json_library),
            str(output_dir / Path(compiled.main_source_path)),
        ]
        return self._run(STEP_COMPILE, command)

    def delete_sources(self, output_dir: Path) -> StepResult:
        """Remove every .java file below `output_dir`."""
        errors = []
        for path in sorted(output_dir.rglob("*.java")):
            try:
                path.unlink()
            except OSError as e:
                logger.error(f"Error deleting {path}: {e}")
                errors.append(f"{path}: {e}")
        return StepResult(name=STEP_CLEAN, ok=not errors, message="\n".join(errors))

    def archive(self, jar_name: str, output_dir: Path) -> StepResult:
        """Package the contents of `output_dir` into `output_dir/jar_name`."""
        if not output_dir.is_dir():
            message = f"Output directory does not exist: {output_dir}"
            logger.error(message)
            return StepResult(name=STEP_ARCHIVE, ok=False, message=message)

        jar_path = output_dir / jar_name
        result = self._run(
            STEP_ARCHIVE,
            [self.config.jar_executable, "cf", str(jar_path), "-C", str(output_dir), "."],
        )
        if result.ok:
            logger.info(f"Jar created at: {jar_path}")
        return result

    def build(
        self,
        compiled: CompiledPlugin,
        output_dir: Path,
        on_step: Optional[Callable[[str], None]] = None,
    ) -> BuildReport:
        """
        Compile, clean up sources and archive.

        Args:
            compiled: Emitter output whose artifacts were already written
            output_dir: Directory holding the written artifacts
            on_step: Called with each step name before the step runs

        Returns:
            BuildReport with one StepResult per step that ran
        """
        report = BuildReport()

        def _notify(step: str) -> None:
            if on_step:
                on_step(step)

        _notify(STEP_COMPILE)
        report.steps.append(self.compile(compiled, output_dir))

        if self.config.delete_sources_after_build:
            _notify(STEP_CLEAN)
            report.steps.append(self.delete_sources(output_dir))

        _notify(STEP_ARCHIVE)
        archive_result = self.archive(compiled.descriptor.jar_name, output_dir)
        report.steps.append(archive_result)
        if archive_result.ok:
            report.jar_path = output_dir / compiled.descriptor.jar_name

        if not report.ok:
            logger.warning(
                f"Build finished with failed step(s): {', '.join(report.failed_steps)}; "
                f"the resulting jar may be unusable"
            )
        return report
