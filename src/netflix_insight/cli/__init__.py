"""CLI entry point: registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="netflix-insight",
    help="Netflix Insight - descriptive analytics over a Netflix catalog export",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"netflix-insight {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Netflix Insight - descriptive analytics over a Netflix catalog export."""


# Import subcommands to register them
from .run import run as _run  # noqa: F401, E402
from .queries import queries as _queries  # noqa: F401, E402
