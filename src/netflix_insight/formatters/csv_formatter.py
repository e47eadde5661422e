"""CSV formatter for Netflix Insight."""

import csv
import io
from typing import List

from .base import BaseFormatter
from ..models import QueryResult


class CsvFormatter(BaseFormatter):
    """Render each result as a ``# name`` line, a header row and data rows."""

    def render(self, results: List[QueryResult]) -> None:
        print(self.format(results), end="")

    def format(self, results: List[QueryResult]) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        for i, r in enumerate(results):
            if i:
                output.write("\n")
            output.write(f"# {r.name}\n")
            writer.writerow(r.columns)
            for row in r.rows:
                writer.writerow(["" if value is None else value for value in row])
        return output.getvalue()
