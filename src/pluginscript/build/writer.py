"""
Write emitted artifacts to the output directory.

A file that cannot be written is logged and recorded; the remaining files
are still written and the run continues.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from pluginscript.emitter.builders import CompiledPlugin

logger = logging.getLogger(__name__)


@dataclass
class WriteReport:
    """Outcome of writing a plugin's artifacts."""

    written: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def write_artifacts(compiled: CompiledPlugin, output_dir: Path) -> WriteReport:
    """
    Write plugin.yml and every Java source below `output_dir`.

    Args:
        compiled: Emitter output
        output_dir: Root of the output layout (created if missing)

    Returns:
        WriteReport listing written and failed paths
    """
    report = WriteReport()
    for source_file in compiled.source_files():
        target = output_dir / Path(source_file.relative_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(source_file.content, encoding="utf-8")
        except OSError as e:
            logger.error(f"Error writing {target}: {e}")
            report.failed.append((target, str(e)))
            continue
        logger.debug(f"Wrote {target}")
        report.written.append(target)

    logger.info(
        f"Wrote {len(report.written)} artifact(s) to {output_dir}"
        + (f", {len(report.failed)} failed" if report.failed else "")
    )
    return report
