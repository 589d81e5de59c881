"""
Pytest configuration and fixtures for pluginscript tests.

Provides sample plugin scripts covering the supported idioms and helpers for
writing them to temporary files.
"""

from pathlib import Path

import pytest

from pluginscript.config import Settings

GREETER_SCRIPT = """\
plugin(() => {
    name("Greeter");
    version("2.1");
    package("com.example.greeter");
});

command("greet", (sender) => {
    description("Greets a player by name");
    let server = sender.getServer();
    let target = server.getPlayerExact(args[0]);
    if (!target) {
        sender.sendMessage("Player not found");
        return;
    }
    let message = args.slice(1).join(" ");
    target.sendMessage(`Hello ${message}`);
    console.log(`greeted ${args[0]}`);
});

command("homes", (sender) => {
    let homes = data.getArray("homes");
    for (let i = 0; i < homes.length; i++) {
        sender.sendMessage(homes[i]);
    }
    homes.push(sender.getName());
    data.set("homes", ["spawn", "base"]);
});

command("weather", (sender) => {
    let body = fetch("https://api.example.com/weather");
    let weather = JSON.parse(body);
    sender.sendMessage(weather.summary);
    console.warn(weather.toString());
});

event("playerJoin", (event) => {
    let player = event.getPlayer();
    player.sendMessage(`Welcome ${player.getName()}`);
});
"""

MINIMAL_SCRIPT = """\
command("ping", (sender) => {
    sender.sendMessage("pong");
});
"""

NO_COMMANDS_SCRIPT = """\
plugin(() => {
    name("Empty");
    version("0.1");
    package("com.example.empty");
});

event("playerJoin", (event) => {
    console.log("joined");
});
"""


@pytest.fixture
def greeter_script() -> str:
    return GREETER_SCRIPT


@pytest.fixture
def minimal_script() -> str:
    return MINIMAL_SCRIPT


@pytest.fixture
def no_commands_script() -> str:
    return NO_COMMANDS_SCRIPT


@pytest.fixture
def write_script(tmp_path: Path):
    """Write a script into tmp_path and return its path."""

    def _write(content: str, name: str = "plugin.js") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing all output into tmp_path."""
    return Settings(
        output_dir=str(tmp_path / "output"),
        javac_executable="javac",
        jar_executable="jar",
        server_jar_path="/opt/spigot/spigot.jar",
        json_simple_jar_path="/opt/spigot/json-simple.jar",
        log_file_enabled=False,
    )
