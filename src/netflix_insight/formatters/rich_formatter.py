"""Rich terminal formatter for Netflix Insight."""

from typing import Any, List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..models import QueryResult
from .base import BaseFormatter


def _cell(value: Any) -> Text:
    if value is None:
        return Text("null", style="dim")
    # Plain text: titles such as "[REC]" must not be read as markup
    return Text(str(value))


class RichFormatter(BaseFormatter):
    """One titled table per analysis."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def render(self, results: List[QueryResult]) -> None:
        for r in results:
            self.console.print(self._table(r))
            self.console.print()

    def format(self, results: List[QueryResult]) -> str:
        with self.console.capture() as capture:
            self.render(results)
        return capture.get()

    def _table(self, result: QueryResult) -> Table:
        table = Table(
            title=f"[bold cyan]{result.name}[/bold cyan]",
            caption=result.question,
            show_lines=False,
            header_style="bold",
        )
        for column in result.columns:
            table.add_column(column)
        if not result.rows:
            table.add_row(*(["[dim]no rows[/dim]"] + [""] * (len(result.columns) - 1)))
        for row in result.rows:
            table.add_row(*(_cell(value) for value in row))
        return table
