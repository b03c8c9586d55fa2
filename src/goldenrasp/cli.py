"""Command-line interface for goldenrasp."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)

from goldenrasp import __version__
from goldenrasp.config import get_config, load_config
from goldenrasp.errors import (
    GoldenRaspError,
    configure_logging,
    get_friendly_message,
    log_error,
)

if TYPE_CHECKING:
    from goldenrasp.movies import CsvLoadReport, MovieRepository

# Load environment variables from .env file
load_dotenv()

console = Console()

CSV_PATH_TYPE = click.Path(dir_okay=False, path_type=Path)

FORMAT_OPTION = click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "json", "csv"]),
    default="text",
    help="Output format",
)

CSV_OPTION = click.option(
    "--csv",
    "csv_path",
    type=CSV_PATH_TYPE,
    default=None,
    help="Movie list CSV (default: from config)",
)


def _fail(error: Exception, context: str) -> NoReturn:
    """Report an error to the user and exit with status 1."""
    log_error(error, context)
    console.print(f"[red]Error:[/red] {escape(get_friendly_message(error))}")
    sys.exit(1)


def _read_csv(csv_path: Path | None) -> CsvLoadReport:
    """Read the movie CSV named on the command line or in the config."""
    from goldenrasp.config import resolve_csv_path
    from goldenrasp.movies import read_movies_csv

    cfg = get_config()
    path = csv_path or resolve_csv_path(cfg)
    return read_movies_csv(path, separator=cfg.data.separator, winner_value=cfg.data.winner_value)


def _open_repository(csv_path: Path | None) -> tuple[MovieRepository, CsvLoadReport]:
    """Load the movie CSV into a fresh in-memory repository."""
    from goldenrasp.movies import MovieRepository

    report = _read_csv(csv_path)
    repository = MovieRepository()
    repository.load(report.movies, report.movie_ids)
    return repository, report


@click.group()
@click.version_option(version=__version__, prog_name="goldenrasp")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output and debug logging")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (no progress, only results)")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Config file to use instead of the default search",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, quiet: bool, config_file: Path | None) -> None:
    """goldenrasp - Find the producers with the shortest and longest gaps between awards."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    cfg = load_config(config_file) if config_file else get_config()
    level = "DEBUG" if verbose else cfg.logging.level
    log_file = Path(cfg.logging.file).expanduser() if cfg.logging.file else None
    configure_logging(level, log_file, stream=verbose)


@main.command()
@CSV_OPTION
@FORMAT_OPTION
@click.pass_context
def intervals(ctx: click.Context, csv_path: Path | None, format: str) -> None:
    """Show the producers with the shortest and longest gaps between wins."""
    from goldenrasp.intervals import ProducerIntervalFinder
    from goldenrasp.output import IntervalReportFormatter

    verbose = ctx.obj.get("verbose", False)
    quiet = ctx.obj.get("quiet", False)

    try:
        repository, _ = _open_repository(csv_path)

        if quiet:
            result = ProducerIntervalFinder(repository).find_intervals()
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console,
                transient=True,
            ) as progress:
                task = progress.add_task("Starting...", total=None)

                def progress_callback(stage: str, current: int, total: int) -> None:
                    progress.update(task, description=stage, completed=current, total=total)

                finder = ProducerIntervalFinder(repository, progress_callback=progress_callback)
                result = finder.find_intervals()

        IntervalReportFormatter(result).render(format, verbose)

    except GoldenRaspError as e:
        _fail(e, "intervals")
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        sys.exit(130)


@main.command()
@CSV_OPTION
@click.option("--winners", is_flag=True, help="Only list winning movies")
@click.option("--year", type=int, default=None, help="Only list movies from this year")
@FORMAT_OPTION
@click.pass_context
def movies(
    ctx: click.Context,
    csv_path: Path | None,
    winners: bool,
    year: int | None,
    format: str,
) -> None:
    """List the movies in the data file."""
    from goldenrasp.output import MovieListFormatter

    verbose = ctx.obj.get("verbose", False)

    try:
        repository, _ = _open_repository(csv_path)
    except GoldenRaspError as e:
        _fail(e, "movies")

    listing = repository.list_movies(winner=True if winners else None, year=year)
    MovieListFormatter(listing).render(format, verbose)


@main.command()
@click.argument("raw")
def producers(raw: str) -> None:
    """Split a producers cell into individual names.

    Example: goldenrasp producers "Allan Carr, Jerry Weintraub and Bo Derek"
    """
    from goldenrasp.intervals import parse_producers

    names = parse_producers(raw)
    if not names:
        console.print("[dim]No producer names found.[/dim]")
        return
    for name in names:
        console.print(escape(name))


@main.command()
@CSV_OPTION
@click.pass_context
def validate(ctx: click.Context, csv_path: Path | None) -> None:
    """Check the movie CSV and report rows that would be skipped."""
    verbose = ctx.obj.get("verbose", False)

    try:
        report = _read_csv(csv_path)
    except GoldenRaspError as e:
        _fail(e, "validate")

    console.print(f"[bold]File:[/bold] {escape(str(report.path))}")
    console.print(f"  Rows read: {report.total_rows}")
    console.print(f"  Movies loaded: {len(report.movies)}")
    console.print(f"  Winners: {report.winner_count}")
    console.print(f"  ID column: {'yes' if report.has_id_column else 'no (row numbers)'}")

    if not report.skipped:
        console.print("[green]All rows are valid.[/green]")
        return

    console.print(f"[yellow]Skipped rows: {len(report.skipped)}[/yellow]")
    shown = report.skipped if verbose else report.skipped[:10]
    for skipped in shown:
        console.print(f"  line {skipped.line_number}: {escape(skipped.reason)}")
    if len(shown) < len(report.skipped):
        console.print(f"  [dim]... and {len(report.skipped) - len(shown)} more (use -v)[/dim]")


@main.command()
@CSV_OPTION
@click.option("--year", type=int, required=True, help="Award year")
@click.option("--title", required=True, help="Movie title")
@click.option("--studios", required=True, help="Studios")
@click.option("--producers", "producers_", required=True, help="Producers, e.g. 'A, B and C'")
@click.option("--winner/--no-winner", default=False, help="Whether the movie won")
def add(
    csv_path: Path | None,
    year: int,
    title: str,
    studios: str,
    producers_: str,
    winner: bool,
) -> None:
    """Validate a movie and append it to the movie CSV."""
    from goldenrasp.config import resolve_csv_path, resolve_id_file
    from goldenrasp.movies import IdAllocator, ValidationRules, append_movie_csv, validate_movie

    cfg = get_config()
    path = csv_path or resolve_csv_path(cfg)
    rules = ValidationRules(**cfg.validation.model_dump())

    try:
        record = validate_movie(
            year,
            title,
            studios,
            producers_,
            winner,
            reference_year=date.today().year,
            rules=rules,
        )

        movie_id = None
        if path.exists():
            report = _read_csv(path)
            if report.has_id_column:
                allocator = IdAllocator(resolve_id_file(cfg))
                allocator.synchronize(report.max_id)
                movie_id = allocator.next_id()

        append_movie_csv(
            path,
            record,
            movie_id=movie_id,
            separator=cfg.data.separator,
            winner_value=cfg.data.winner_value,
        )
    except GoldenRaspError as e:
        _fail(e, "add")

    label = f" with ID {movie_id}" if movie_id is not None else ""
    console.print(f"[green]Added[/green] {escape(record.display_title)}{label}")


@main.group()
def config() -> None:
    """Manage goldenrasp configuration."""
    pass


@config.command(name="show")
def config_show() -> None:
    """Show current configuration."""
    from goldenrasp.config import get_config_path, resolve_csv_path, resolve_id_file

    cfg = get_config()
    config_file = get_config_path()

    console.print("[bold]Current Configuration[/bold]")
    console.print()

    if config_file:
        console.print(f"[dim]Config file:[/dim] {escape(str(config_file))}")
    else:
        console.print("[dim]Config file:[/dim] (none - using defaults)")
    console.print()

    console.print("[bold]Data:[/bold]")
    console.print(f"  CSV file: {escape(str(resolve_csv_path(cfg)))}")
    console.print(f"  Separator: {escape(repr(cfg.data.separator))}")
    console.print(f"  Winner value: {escape(cfg.data.winner_value)}")
    console.print(f"  ID file: {escape(str(resolve_id_file(cfg)))}")
    console.print()

    console.print("[bold]Validation:[/bold]")
    console.print(f"  Min year: {cfg.validation.min_year}")
    console.print(f"  Max year: {cfg.validation.max_year or '(current year)'}")
    console.print(
        f"  Text length: {cfg.validation.min_text_length}-{cfg.validation.max_text_length}"
    )
    console.print()

    console.print("[bold]Logging:[/bold]")
    console.print(f"  Level: {cfg.logging.level}")
    console.print(f"  File: {escape(cfg.logging.file or '(none)')}")


@config.command(name="path")
def config_path() -> None:
    """Show configuration file paths."""
    from goldenrasp.config import find_config_file, get_config_paths

    console.print("[bold]Configuration paths (in priority order):[/bold]")
    config_file = find_config_file()

    for path in get_config_paths():
        if path.exists():
            if path == config_file:
                console.print(f"  [green]{escape(str(path))}[/green] (active)")
            else:
                console.print(f"  {escape(str(path))} (exists)")
        else:
            console.print(f"  [dim]{escape(str(path))}[/dim]")

    console.print()
    console.print("[bold]Other paths:[/bold]")
    console.print(f"  .env file: {escape(str(Path.cwd() / '.env'))}")


@config.command(name="init")
@click.option("--force", is_flag=True, help="Overwrite existing config file")
@click.option("--csv", "csv_file", default="", help="Movie list CSV to reference")
def config_init(force: bool, csv_file: str) -> None:
    """Create a default goldenrasp.ini in the current directory."""
    from goldenrasp.config import INI_FILE_NAME, save_default_config

    config_path = Path.cwd() / INI_FILE_NAME

    if config_path.exists() and not force:
        console.print(f"[yellow]Config file already exists:[/yellow] {escape(str(config_path))}")
        console.print("Use --force to overwrite.")
        sys.exit(1)

    save_default_config(config_path, csv_file=csv_file)
    console.print(f"[green]Created config file:[/green] {escape(str(config_path))}")
    console.print("Edit this file to customize your settings.")


if __name__ == "__main__":
    main()
