"""Run analyses over a catalog file."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from ..engine import QueryEngine
from ..exceptions import NetflixInsightError
from ..formatters import get_formatter
from ..loader import load_catalog
from ..logging_config import get_logger, setup_logging
from . import app
from ._common import err_console, resolve_config

logger = get_logger(__name__)


@app.command()
def run(
    data: Path = typer.Argument(
        ...,
        help="Delimited catalog file (e.g. netflix_titles.csv)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    query: Optional[List[str]] = typer.Option(
        None,
        "--query",
        "-q",
        help="Analysis to run; repeat for several (default: all)",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: rich, json or csv",
    ),
    current_year: Optional[int] = typer.Option(
        None,
        "--current-year",
        help="Reference year for recent-window analyses (default: this year)",
    ),
    top_n: Optional[int] = typer.Option(
        None,
        "--top",
        help="Row limit for ranked analyses",
        min=1,
    ),
    delimiter: Optional[str] = typer.Option(
        None,
        "--delimiter",
        "-d",
        help="Field delimiter of the data file",
    ),
    no_header: bool = typer.Option(
        False,
        "--no-header",
        help="Data file has no header row; columns are read positionally",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail on the first malformed row instead of skipping it",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML configuration file",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    quiet: bool = typer.Option(False, "--quiet", help="Only log errors"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file"),
):
    """
    Load a catalog file and print the analyses.

    [bold cyan]Examples:[/bold cyan]

      netflix-insight run netflix_titles.csv

      netflix-insight run netflix_titles.csv -q content_trend -q monthly_additions

      netflix-insight run netflix_titles.csv --format json --current-year 2021
    """
    try:
        settings = resolve_config(
            config=config,
            current_year=current_year,
            top_n=top_n,
            delimiter=delimiter,
            no_header=no_header,
            strict=strict,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
        )
    except NetflixInsightError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    # Flags already folded into settings.verbosity, above file and env values
    setup_logging(
        verbose=settings.verbosity == "verbose",
        quiet=settings.verbosity == "quiet",
        log_file=log_file,
    )

    try:
        formatter = get_formatter(settings.output_format)
        catalog = load_catalog(data, settings)
        results = QueryEngine(catalog, settings).run_all(query or None)
    except NetflixInsightError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    if catalog.report is not None and catalog.report.problems:
        logger.warning(
            "%d row problem(s); %d row(s) dropped",
            len(catalog.report.problems),
            catalog.report.rows_dropped,
        )

    formatter.render(results)
