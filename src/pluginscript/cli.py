"""
pluginscript CLI - compile plugin scripts into server plugin jars.

Commands:
    compile    Translate, write sources, compile and package a plugin
    translate  Print the rewritten script without writing anything
    inspect    Show the metadata, commands and events found in a script
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from pluginscript.exceptions import PluginScriptError
from pluginscript.logging_config import setup_logging

app = typer.Typer(
    name="pluginscript",
    help="pluginscript - compile JavaScript-style plugin scripts into Bukkit plugins",
    no_args_is_help=True,
)

console = Console()


def format_elapsed(seconds: float) -> str:
    """Render elapsed time as 'H hours, M minutes, S seconds.'"""
    total = int(seconds)
    hours = (total // 3600) % 24
    minutes = (total // 60) % 60
    secs = total % 60
    return f"{hours} hours, {minutes} minutes, {secs} seconds."


def _init_logging() -> None:
    try:
        setup_logging(context="cli")
    except PermissionError:
        logging.basicConfig(level=logging.INFO)


@app.command("compile")
def compile_command(
    source: Path = typer.Argument(..., help="Path to the plugin script (.js)"),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Output directory (default: settings)"
    ),
    build: bool = typer.Option(
        True, "--build/--no-build", help="Run javac and jar after writing sources"
    ),
    keep_sources: bool = typer.Option(
        False, "--keep-sources", help="Keep generated .java files after the build"
    ),
) -> None:
    """
    Compile a plugin script into a plugin jar.

    Writes plugin.yml and the generated Java sources, then compiles and
    packages them. Build-step failures are reported but do not stop the run.
    """
    from pluginscript.config import settings
    from pluginscript.pipeline.orchestrator import Stage, compile_file

    _init_logging()

    config = settings
    if keep_sources:
        config = settings.model_copy(update={"delete_sources_after_build": False})

    console.print(f"[bold blue]Compiling:[/bold blue] {source}")

    with Progress(
        TextColumn("[progress.description]{task.description:<20}"),
        BarColumn(bar_width=10),
        TaskProgressColumn(),
        console=console,
        transient=False,
    ) as progress:
        task = progress.add_task("Starting", total=100)

        def _on_stage(stage: Stage) -> None:
            progress.update(
                task, completed=int(stage.progress * 100), description=stage.label
            )

        try:
            outcome = compile_file(
                source,
                output_dir=output_dir,
                build=build,
                config=config,
                on_stage=_on_stage,
            )
        except PluginScriptError as e:
            progress.stop()
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(1)

        progress.update(task, completed=100)

    descriptor = outcome.translation.descriptor
    console.print()
    console.print("[bold]Summary:[/bold]")
    console.print(f"  Plugin: {descriptor.name} {descriptor.version} ({descriptor.package})")
    console.print(f"  Commands: {len(outcome.translation.compiled.command_classes)}")
    console.print(f"  Files written: {len(outcome.write_report.written)}")

    for path, reason in outcome.write_report.failed:
        console.print(f"  [yellow]⚠ Not written:[/yellow] {path} ({reason})")

    if outcome.build_report is not None:
        if outcome.build_report.jar_path:
            console.print(f"  Jar: {outcome.build_report.jar_path}")
        for step in outcome.build_report.failed_steps:
            console.print(f"  [yellow]⚠ Build step failed:[/yellow] {step}")

    console.print(f"\nTotal compilation time: {format_elapsed(outcome.elapsed_seconds)}")


@app.command()
def translate(
    source: Path = typer.Argument(..., help="Path to the plugin script (.js)"),
) -> None:
    """Print the script after the rewrite pipeline, without emitting files."""
    from pluginscript.pipeline.orchestrator import read_source
    from pluginscript.rewriting.pipeline import rewrite

    try:
        text = read_source(source)
    except PluginScriptError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    result = rewrite(text)
    console.print(result.text, markup=False, highlight=False)


@app.command()
def inspect(
    source: Path = typer.Argument(..., help="Path to the plugin script (.js)"),
) -> None:
    """Show the plugin metadata, commands and events declared in a script."""
    from pluginscript.pipeline.orchestrator import read_source, translate_source

    try:
        translation = translate_source(read_source(source), source.name)
    except PluginScriptError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    descriptor = translation.descriptor
    console.print(f"[bold]Plugin:[/bold] {descriptor.name}")
    console.print(f"  Version: {descriptor.version}")
    console.print(f"  Package: {descriptor.package}")
    if descriptor.uses_data:
        console.print(f"  Data file: {descriptor.data_file}")

    commands = Table(title="Commands")
    commands.add_column("Name")
    commands.add_column("Parameter")
    commands.add_column("Description")
    for command in translation.commands:
        commands.add_row(command.name, command.parameter, command.description)
    console.print(commands)

    if translation.events:
        events = Table(title="Events")
        events.add_column("Name")
        events.add_column("Handler")
        events.add_column("Type")
        for event in translation.events:
            events.add_row(event.name, event.method_name, event.qualified_type)
        console.print(events)

    capabilities = sorted(c.value for c in translation.rewrite.capabilities)
    console.print(f"Capabilities: {', '.join(capabilities) or 'none'}")


if __name__ == "__main__":
    app()
