"""
Tests for writing artifacts and driving javac/jar.
"""

import os
from unittest.mock import Mock, patch

import pytest

from pluginscript.build.driver import BuildDriver
from pluginscript.build.writer import write_artifacts
from pluginscript.config import Settings
from pluginscript.pipeline.orchestrator import translate_source


def completed(returncode=0, stdout=""):
    return Mock(returncode=returncode, stdout=stdout)


@pytest.fixture
def minimal(minimal_script):
    return translate_source(minimal_script).compiled


@pytest.fixture
def greeter(greeter_script):
    return translate_source(greeter_script).compiled


@pytest.fixture
def output_dir(test_settings):
    return test_settings.output_path


class TestWriteArtifacts:
    """Tests for write_artifacts."""

    def test_writes_layout(self, minimal, output_dir):
        """Test that the manifest and sources land in the package layout."""
        report = write_artifacts(minimal, output_dir)

        assert report.ok
        assert (output_dir / "plugin.yml").is_file()
        assert (output_dir / "me/example/myplugin/Main.java").is_file()
        assert (output_dir / "me/example/myplugin/Ping.java").is_file()
        assert len(report.written) == 3

    def test_content_matches_render(self, minimal, output_dir):
        """Test that written files contain the rendered sources."""
        write_artifacts(minimal, output_dir)

        main = (output_dir / "me/example/myplugin/Main.java").read_text(encoding="utf-8")
        assert main == minimal.main_class.render()

    def test_failure_is_reported_and_run_continues(self, minimal, output_dir, caplog):
        """Test that an unwritable file does not stop the others."""
        output_dir.mkdir(parents=True)
        (output_dir / "me").write_text("not a directory")

        report = write_artifacts(minimal, output_dir)

        assert not report.ok
        assert report.written == [output_dir / "plugin.yml"]
        assert len(report.failed) == 2
        assert "Error writing" in caplog.text


class TestBuildDriverCompile:
    """Tests for the javac step."""

    def test_javac_command(self, minimal, output_dir, test_settings):
        """Test javac arguments for a plugin without JSON helpers."""
        driver = BuildDriver(test_settings)

        with patch("pluginscript.build.driver.subprocess.run") as mock_run:
            mock_run.return_value = completed()
            result = driver.compile(minimal, output_dir)

        assert result.ok
        args = mock_run.call_args[0][0]
        assert args == [
            "javac",
            "-verbose",
            "-d",
            str(output_dir),
            "-cp",
            os.pathsep.join([str(output_dir), "/opt/spigot/spigot.jar"]),
            str(output_dir / "me/example/myplugin/Main.java"),
        ]

    def test_json_library_on_classpath(self, greeter, output_dir, test_settings):
        """Test that json-simple is added when the plugin needs it."""
        driver = BuildDriver(test_settings)

        with patch("pluginscript.build.driver.subprocess.run") as mock_run:
            mock_run.return_value = completed()
            driver.compile(greeter, output_dir)

        args = mock_run.call_args[0][0]
        classpath = args[args.index("-cp") + 1]
        assert classpath.split(os.pathsep) == [
            str(output_dir),
            "/opt/spigot/spigot.jar",
            "/opt/spigot/json-simple.jar",
        ]

    def test_quiet_javac(self, minimal, output_dir, test_settings):
        """Test that -verbose can be turned off."""
        config = test_settings.model_copy(update={"javac_verbose": False})

        with patch("pluginscript.build.driver.subprocess.run") as mock_run:
            mock_run.return_value = completed()
            BuildDriver(config).compile(minimal, output_dir)

        assert "-verbose" not in mock_run.call_args[0][0]

    def test_nonzero_exit(self, minimal, output_dir, test_settings, caplog):
        """Test that a failing javac is recorded, not raised."""
        with patch("pluginscript.build.driver.subprocess.run") as mock_run:
            mock_run.return_value = completed(1, "Main.java:3: error: boom\n")
            result = BuildDriver(test_settings).compile(minimal, output_dir)

        assert not result.ok
        assert result.returncode == 1
        assert "boom" in result.message
        assert "failed with exit code: 1" in caplog.text

    def test_missing_tool(self, minimal, output_dir, test_settings):
        """Test that a missing javac is a failed step."""
        with patch("pluginscript.build.driver.subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("javac")
            result = BuildDriver(test_settings).compile(minimal, output_dir)

        assert not result.ok
        assert result.returncode is None


class TestBuildDriverSteps:
    """Tests for clean, archive and the full build sequence."""

    def test_delete_sources(self, minimal, output_dir, test_settings):
        """Test that only .java files are removed."""
        write_artifacts(minimal, output_dir)

        result = BuildDriver(test_settings).delete_sources(output_dir)

        assert result.ok
        assert list(output_dir.rglob("*.java")) == []
        assert (output_dir / "plugin.yml").is_file()

    def test_archive_missing_directory(self, output_dir, test_settings):
        """Test that archiving a missing directory fails without running jar."""
        with patch("pluginscript.build.driver.subprocess.run") as mock_run:
            result = BuildDriver(test_settings).archive("X.jar", output_dir)

        assert not result.ok
        mock_run.assert_not_called()

    def test_archive_command(self, output_dir, test_settings):
        output_dir.mkdir(parents=True)

        with patch("pluginscript.build.driver.subprocess.run") as mock_run:
            mock_run.return_value = completed()
            result = BuildDriver(test_settings).archive("X.jar", output_dir)

        assert result.ok
        assert mock_run.call_args[0][0] == [
            "jar",
            "cf",
            str(output_dir / "X.jar"),
            "-C",
            str(output_dir),
            ".",
        ]

    def test_build_sequence(self, minimal, output_dir, test_settings):
        """Test compile, clean and archive run in order."""
        write_artifacts(minimal, output_dir)
        steps = []

        with patch("pluginscript.build.driver.subprocess.run") as mock_run:
            mock_run.return_value = completed()
            report = BuildDriver(test_settings).build(
                minimal, output_dir, on_step=steps.append
            )

        assert report.ok
        assert steps == ["compile", "clean", "archive"]
        assert [step.name for step in report.steps] == steps
        assert report.jar_path == output_dir / "MyPlugin.jar"
        assert list(output_dir.rglob("*.java")) == []

    def test_failed_compile_does_not_stop_build(self, minimal, output_dir, test_settings):
        """Test that later steps still run after javac fails."""
        write_artifacts(minimal, output_dir)

        with patch("pluginscript.build.driver.subprocess.run") as mock_run:
            mock_run.side_effect = [completed(1, "error"), completed()]
            report = BuildDriver(test_settings).build(minimal, output_dir)

        assert not report.ok
        assert report.failed_steps == ["compile"]
        assert mock_run.call_count == 2

    def test_keep_sources(self, minimal, output_dir):
        """Test that the clean step is skipped when sources are kept."""
        config = Settings(
            output_dir=str(output_dir),
            delete_sources_after_build=False,
        )
        write_artifacts(minimal, output_dir)

        with patch("pluginscript.build.driver.subprocess.run") as mock_run:
            mock_run.return_value = completed()
            report = BuildDriver(config).build(minimal, output_dir)

        assert [step.name for step in report.steps] == ["compile", "archive"]
        assert (output_dir / "me/example/myplugin/Main.java").is_file()
