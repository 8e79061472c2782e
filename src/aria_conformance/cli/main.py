"""Main CLI application entry point."""

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

from aria_conformance import __version__
from aria_conformance.core.registry import TestRegistry
from aria_conformance.services.catalog import HtmlSpecificationCatalog
from aria_conformance.suites import get_all_suites, get_suite_by_id, suggest_suite
from aria_conformance.utils.config import AppConfig, ConfigLoader
from aria_conformance.utils.exceptions import ConfigurationError, UnknownBehavior

console = Console()

app = typer.Typer(
    name="aria-conformance",
    help="Inspect ARIA widget conformance suites and their catalog coverage.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"aria-conformance v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """aria-conformance - keyboard and ARIA conformance suites for widgets."""
    pass


def _load_catalog(
    examples_dir: Path | None,
) -> tuple[AppConfig, HtmlSpecificationCatalog]:
    config = ConfigLoader.load()
    if examples_dir:
        config.examples_dir = examples_dir
    if not config.examples_dir:
        raise ConfigurationError(
            "Set ARIA_EXAMPLES_DIR or pass --examples-dir to read example pages"
        )
    return config, HtmlSpecificationCatalog(config.examples_dir)


def _exit_unknown_suite(suite_id: str) -> NoReturn:
    typer.echo(f"Error: Unknown suite '{suite_id}'.")
    suggestion = suggest_suite(suite_id)
    if suggestion:
        typer.echo(f"Did you mean: {suggestion}?")
    typer.echo(f"Available suites: {', '.join(s.id for s in get_all_suites())}")
    raise typer.Exit(code=3)


@app.command()
def suites() -> None:
    """List the built-in widget suites."""
    table = Table(title="Suites")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Example page")
    table.add_column("Cases", justify="right")
    for info in get_all_suites():
        table.add_row(info.id, info.name, info.example_ref, str(len(info.suite.cases)))
    console.print(table)


examples_dir_option = typer.Option(
    None,
    "--examples-dir",
    "-d",
    help="Root directory of the example pages (overrides ARIA_EXAMPLES_DIR)",
)


@app.command()
def behaviors(
    example: str = typer.Argument(
        ..., help="Example page path, or the ID of a built-in suite"
    ),
    examples_dir: Path | None = examples_dir_option,
) -> None:
    """List the behaviors documented on an example page."""
    info = get_suite_by_id(example)
    example_ref = info.example_ref if info else example
    try:
        _, catalog = _load_catalog(examples_dir)
        records = catalog.behaviors(example_ref)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(code=4)

    if not records:
        typer.echo(f"No documented behaviors found in {example_ref}")
        raise typer.Exit(code=1)

    table = Table(title=example_ref)
    table.add_column("Behavior ID", style="cyan")
    table.add_column("Description")
    for record in records:
        table.add_row(record.behavior_id, record.description)
    console.print(table)


@app.command()
def coverage(
    suite: str = typer.Argument(..., help="ID of a built-in suite"),
    examples_dir: Path | None = examples_dir_option,
) -> None:
    """Show which documented behaviors a suite's tests cover.

    Exits with code 1 when any documented behavior has no test.
    """
    info = get_suite_by_id(suite)
    if not info:
        _exit_unknown_suite(suite)

    try:
        config, catalog = _load_catalog(examples_dir)
        registry = TestRegistry(catalog, config)
        info.suite.build(registry)
        documented = catalog.behaviors(info.example_ref)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(code=4)
    except UnknownBehavior as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    covered = registry.covered_behaviors(info.example_ref)
    table = Table(title=f"{info.name} ({info.example_ref})")
    table.add_column("Behavior ID", style="cyan")
    table.add_column("Tests", justify="right")
    table.add_column("Covered")
    for record in documented:
        count = sum(1 for c in registry.cases if c.behavior_id == record.behavior_id)
        if record.behavior_id in covered:
            table.add_row(record.behavior_id, str(count), "[green]yes[/green]")
        else:
            table.add_row(record.behavior_id, str(count), "[red]no[/red]")
    console.print(table)

    uncovered = [r.behavior_id for r in documented if r.behavior_id not in covered]
    if uncovered:
        console.print(
            f"[yellow]{len(uncovered)} of {len(documented)} behaviors "
            f"have no test:[/yellow] {', '.join(uncovered)}"
        )
        raise typer.Exit(code=1)
    console.print(f"[green]All {len(documented)} behaviors covered.[/green]")


if __name__ == "__main__":
    app()
