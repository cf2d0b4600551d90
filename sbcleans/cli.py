"""
sbcleans.cli - Typer CLI entry point.

Provides the export, motion, check and init-config subcommands.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from sbcleans import __version__
from sbcleans.config import CONFIG_FILENAME, create_default_config, load_config, write_config
from sbcleans.exceptions import CleansError
from sbcleans.host.document import StoryboardDocument
from sbcleans.logging import configure_logging

app = typer.Typer(
    name="sbcleans",
    help="Storyboard cleans export automation.\n\n"
    "Normalizes a storyboard project, exports movies and conformation files, "
    "and sorts the results into a dated cleans folder.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"sbcleans {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """sbcleans - Storyboard cleans export automation."""
    pass


def load_document(document: str) -> StoryboardDocument:
    try:
        return StoryboardDocument.load(Path(document).expanduser())
    except CleansError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command("export")
def export_cleans(
    document: str = typer.Argument(..., help="Storyboard document (YAML)"),
    dest: str | None = typer.Option(
        None, "--dest", "-d", help="Export path and filename, e.g. out/Show_SQ010_v03.sbpz"
    ),
    config_file: str | None = typer.Option(None, "--config", "-c", help="cleans.yaml to use"),
    no_movies: bool = typer.Option(False, "--no-movies", help="Skip the movie export passes"),
    save: bool = typer.Option(
        False, "--save", "-s", help="Write the normalized project back to the document"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Export cleans for a storyboard project.

    Asks for the export path when --dest is not given; an empty answer
    cancels without changes.
    """
    configure_logging(verbose)

    from sbcleans.pipeline import ExportCleans

    try:
        config = load_config(Path(config_file) if config_file else Path.cwd())
    except CleansError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    if no_movies:
        config = config.model_copy(update={"export_movies": False})

    model = load_document(document)

    if dest is None:
        dest = typer.prompt("Select export path and filename (*.sbpz)", default="")
    if not dest:
        raise typer.Exit()

    result = ExportCleans(model, config).run(Path(dest).expanduser())

    table = Table(title="Cleans Export")
    table.add_column("Step", style="cyan")
    table.add_column("Status")
    table.add_column("Details", style="dim")
    for step in result.steps:
        status = "[green]✓[/green]" if step.ok else "[red]✗[/red]"
        table.add_row(step.name, status, step.detail)
    console.print(table)

    if save:
        model.save(Path(document).expanduser())
        console.print(f"[dim]  Saved project to {document}[/dim]")

    failed = result.failed_step
    if failed is not None:
        console.print(f"[red]Error: {failed.detail}[/red]")
        raise typer.Exit(1)

    if result.directories is not None:
        console.print(f"[green]✓[/green] Cleans exported to {result.directories.cleans}")
    if result.report_path:
        console.print(
            f"[yellow]⚠ {len(result.motion_scenes)} motion layer(s) listed in "
            f"{result.report_path.name}[/yellow]"
        )


@app.command("motion")
def scan_motion(
    document: str = typer.Argument(..., help="Storyboard document (YAML)"),
    attribute: str = typer.Option("skew", "--attribute", "-a", help="Layer function to scan"),
) -> None:
    """List scenes with multi-keyframe motion layers, without exporting."""
    from collections import Counter

    from sbcleans.motion import detect_motion_layer_scenes

    model = load_document(document)
    scenes = detect_motion_layer_scenes(model, attribute)

    if not scenes:
        console.print("[green]✓[/green] No motion layers found")
        return

    table = Table(title=f"Scenes With {attribute.title()} Motion")
    table.add_column("Scene", style="cyan")
    table.add_column("Layers", style="yellow")
    counts = Counter(scenes)
    for scene, count in counts.items():
        table.add_row(scene, str(count))
    console.print(table)
    console.print(
        f"[yellow]⚠ {len(scenes)} motion layer(s) in {len(counts)} scene(s)[/yellow]"
    )


@app.command("check")
def check_name(
    name: str = typer.Argument(..., help="Export filename, with or without extension"),
    dest_check: bool = typer.Option(
        False, "--preflight", "-p", help="Also check the destination directory and disk space"
    ),
) -> None:
    """Validate and parse an export filename."""
    from sbcleans.naming import parse_file_name, validate_file_name
    from sbcleans.validation import run_preflight_checks

    try:
        config = load_config(Path.cwd())
    except CleansError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    path = Path(name)
    base_name = path.stem

    if not validate_file_name(base_name, config.placeholder_name):
        console.print("[red]Error: No filename given.[/red]")
        raise typer.Exit(1)

    try:
        parsed = parse_file_name(base_name, config.sequence_prefix)
    except CleansError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] sequence: {parsed.sequence}, version: {parsed.version}")

    if dest_check:
        results = run_preflight_checks(path.expanduser().resolve())
        for check, outcome in results["checks"].items():
            if "error" in outcome:
                console.print(f"[red]✗[/red] {check}: {outcome['error']}")
            else:
                console.print(f"[green]✓[/green] {check}")
        if not results["passed"]:
            raise typer.Exit(1)


@app.command("init-config")
def init_config(
    path: str = typer.Option(".", "--path", "-d", help="Directory to write cleans.yaml in"),
) -> None:
    """Write a default cleans.yaml."""
    config_path = Path(path) / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[red]Error: '{config_path}' already exists[/red]")
        raise typer.Exit(1)

    write_config(create_default_config(), config_path)
    console.print(f"[green]✓[/green] Created {config_path}")


if __name__ == "__main__":
    app()
