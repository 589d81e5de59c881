"""
Tests for the compilation orchestrator.
"""

from unittest.mock import Mock, patch

import pytest

from pluginscript.exceptions import NoCommandsError, SourceReadError
from pluginscript.pipeline.orchestrator import (
    Stage,
    compile_file,
    read_source,
    translate_source,
)


class TestTranslateSource:
    """Tests for translate_source."""

    def test_translation_contents(self, greeter_script):
        """Test that every piece of the translation is populated."""
        translation = translate_source(greeter_script, "greeter.js")

        assert translation.descriptor.name == "Greeter"
        assert [c.name for c in translation.commands] == ["greet", "homes", "weather"]
        assert [e.name for e in translation.events] == ["playerJoin"]
        assert translation.rewrite.symbols.lists == {"homes"}
        assert translation.compiled.manifest.name == "Greeter"

    def test_rewritten_bodies_attached(self, greeter_script):
        """Test that definitions receive their rewritten bodies."""
        translation = translate_source(greeter_script)

        homes = translation.commands[1]
        assert "List<String> homes" in homes.rewritten_body
        assert "let homes" in homes.body
        assert "Player player" in translation.events[0].rewritten_body

    def test_stage_callback(self, minimal_script):
        stages = []

        translate_source(minimal_script, on_stage=stages.append)

        assert stages == [Stage.EXTRACT, Stage.REWRITE, Stage.EMIT]

    def test_no_commands(self, no_commands_script):
        with pytest.raises(NoCommandsError):
            translate_source(no_commands_script, "empty.js")


class TestReadSource:
    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceReadError) as exc_info:
            read_source(tmp_path / "missing.js")

        assert exc_info.value.path == tmp_path / "missing.js"
        assert "Could not read source file" in str(exc_info.value)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.js"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(SourceReadError):
            read_source(path)


class TestCompileFile:
    """Tests for compile_file."""

    def test_write_only(self, write_script, greeter_script, test_settings):
        """Test compiling without running the JDK tools."""
        path = write_script(greeter_script)

        outcome = compile_file(path, build=False, config=test_settings)

        output_dir = test_settings.output_path
        assert outcome.ok
        assert outcome.output_dir == output_dir
        assert outcome.build_report is None
        assert outcome.elapsed_seconds >= 0
        assert (output_dir / "plugin.yml").is_file()
        assert (output_dir / "com/example/greeter/Main.java").is_file()

    def test_explicit_output_dir(self, write_script, minimal_script, test_settings, tmp_path):
        path = write_script(minimal_script)
        target = tmp_path / "elsewhere"

        outcome = compile_file(path, output_dir=target, build=False, config=test_settings)

        assert outcome.output_dir == target
        assert (target / "plugin.yml").is_file()

    def test_no_commands_writes_nothing(self, write_script, no_commands_script, test_settings):
        """Test that a script without commands fails before writing."""
        path = write_script(no_commands_script)

        with pytest.raises(NoCommandsError):
            compile_file(path, config=test_settings)

        assert not test_settings.output_path.exists()

    def test_missing_source(self, tmp_path, test_settings):
        with pytest.raises(SourceReadError):
            compile_file(tmp_path / "nope.js", config=test_settings)

    def test_stage_order_with_build(self, write_script, minimal_script, test_settings):
        """Test that progress stages are reported in execution order."""
        path = write_script(minimal_script)
        stages = []

        with patch("pluginscript.build.driver.subprocess.run") as mock_run:
            mock_run.return_value = Mock(returncode=0, stdout="")
            outcome = compile_file(path, config=test_settings, on_stage=stages.append)

        assert stages == list(Stage)
        assert outcome.build_report.ok
        assert outcome.ok

    def test_build_failure_is_not_raised(self, write_script, minimal_script, test_settings):
        path = write_script(minimal_script)

        with patch("pluginscript.build.driver.subprocess.run") as mock_run:
            mock_run.return_value = Mock(returncode=2, stdout="error")
            outcome = compile_file(path, config=test_settings)

        assert not outcome.ok
        assert outcome.build_report.failed_steps == ["compile", "archive"]


class TestStage:
    def test_progress_is_monotonic(self):
        progress = [stage.progress for stage in Stage]

        assert progress == sorted(progress)
        assert progress[-1] == 1.0

    def test_labels(self):
        assert Stage.WRITE.label == "Converting classes"
        assert Stage.COMPILE.label == "Compiling classes"
        assert Stage.ARCHIVE.label == "Generating .jar"
