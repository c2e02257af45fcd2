"""
SetSight CLI - Command Line Interface for Melee set analysis

Provides commands for:
- Analyzing a folder of parsed replays
- Listing the stat catalogue
- Generating a default configuration file
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from setsight import __version__
from setsight.analysis.catalogue import STAT_CATALOGUE
from setsight.analysis.filtering import NoValidMatchSetError
from setsight.core.config import (
    SetSightConfig,
    generate_default_config,
    load_config,
    resolve_log_level,
    set_config,
)
from setsight.export import export_games_to_csv, export_summary_to_csv, export_to_json
from setsight.pipeline.orchestrator import SetReport, analyze_folder

app = typer.Typer(
    name="setsight",
    help="Head-to-head stats for a set of Melee replays",
    add_completion=False,
)
console = Console()

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]SetSight[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose output"),
) -> None:
    """SetSight - Melee set analyzer"""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def _apply_logging_config(config: SetSightConfig) -> None:
    root = logging.getLogger()
    level = resolve_log_level(config.logging.level)
    # --verbose wins over the configured level
    if root.level != logging.DEBUG:
        root.setLevel(level)
    for handler in root.handlers:
        handler.setFormatter(logging.Formatter(config.logging.format))


def _print_games(report: SetReport) -> None:
    table = Table(title="Games")
    table.add_column("#", style="dim")
    table.add_column("Stage", style="cyan")
    table.add_column("Players")
    table.add_column("Duration", justify="right")

    for number, game in enumerate(report.games, start=1):
        players = " vs ".join(
            f"P{p.port} {p.character_name} ({p.outcome})" for p in game.players
        )
        table.add_row(str(number), game.stage_name, players, game.duration)

    console.print(table)


def _print_summary(report: SetReport) -> None:
    table = Table(title="Set Summary")
    table.add_column("Stat", style="cyan")

    ports = [r.port for r in report.summary[0].results] if report.summary else []
    for port in ports:
        table.add_column(f"Port {port}", style="green", justify="right")

    for output in report.summary:
        table.add_row(output.definition.display_name, *(r.simple.text for r in output.results))

    console.print(table)


def _print_highlights(report: SetReport) -> None:
    table = Table(title="Highlights", show_header=False)
    table.add_column("Stat", style="magenta")
    table.add_column("Values")
    for highlight in report.bts_summary:
        values = " | ".join("N/A" if v is None else str(v) for v in highlight.results)
        table.add_row(highlight.definition.display_name, values)
    console.print(table)


@app.command()
def analyze(
    folder: Path = typer.Argument(
        Path("."),
        help="Folder containing parsed replay .json files",
        exists=True,
        file_okay=False,
        resolve_path=True,
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="JSON output file (default: output.json in the current folder)"
    ),
    csv: Optional[Path] = typer.Option(None, "--csv", help="Also write the stat summary as CSV"),
    games_csv: Optional[Path] = typer.Option(
        None, "--games-csv", help="Also write the per-game summaries as CSV"
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", "-s", help="Seed for the highlight recap (repeatable output)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (.yaml, .toml or .json)"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only write files, print no tables"),
) -> None:
    """
    Compute head-to-head stats for every replay in FOLDER.

    Non-singles games and games whose ports differ from the majority are
    excluded and listed.
    """
    try:
        config = load_config(config_file)
        _apply_logging_config(config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading config:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    set_config(config)

    try:
        run = analyze_folder(folder, seed=seed, config=config)
    except NoValidMatchSetError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    for exclusion in run.filter_result.exclusions:
        console.print(f"[yellow]Excluded[/yellow] {exclusion.file_path} ({exclusion.detail})")

    report = run.report
    if not quiet:
        _print_games(report)
        _print_summary(report)
        _print_highlights(report)

    output_path = output or Path(config.export.output_file)
    export_to_json(report, output_path, indent=config.export.json_indent)
    console.print(f"[green]Finished writing stats to {output_path}![/green]")

    if csv:
        export_summary_to_csv(report, csv, delimiter=config.export.csv_delimiter)
        console.print(f"[green]Wrote summary CSV to {csv}[/green]")

    if games_csv:
        export_games_to_csv(report, games_csv, delimiter=config.export.csv_delimiter)
        console.print(f"[green]Wrote games CSV to {games_csv}[/green]")


@app.command()
def stats() -> None:
    """List every stat in the catalogue."""
    table = Table(title="Stat Catalogue")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Better")

    for definition in STAT_CATALOGUE:
        table.add_row(
            str(definition.id),
            definition.display_name,
            str(definition.value_type),
            str(definition.better_direction),
        )

    console.print(table)


@app.command("config-init")
def config_init(
    path: Path = typer.Argument(Path("setsight.yaml"), help="Where to write the config file"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write a default configuration file."""
    if path.exists() and not force:
        console.print(f"[red]{path} already exists[/red] (use --force to overwrite)")
        raise typer.Exit(1)

    try:
        generate_default_config(path)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]Wrote default config to {path}[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app()


if __name__ == "__main__":
    main()
