"""List the registered analyses."""

from rich.table import Table

from ..engine import QueryEngine
from . import app
from ._common import console


@app.command()
def queries():
    """
    List every analysis with the question it answers.

    [bold cyan]Examples:[/bold cyan]

      netflix-insight queries
    """
    table = Table(title="[bold cyan]Available analyses[/bold cyan]", header_style="bold")
    table.add_column("name")
    table.add_column("question")
    table.add_column("columns", style="dim")
    for entry in QueryEngine.available():
        table.add_row(entry.name, entry.question, ", ".join(entry.columns))
    console.print(table)
