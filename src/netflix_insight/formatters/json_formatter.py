"""JSON formatter for Netflix Insight."""

import json
from typing import List

from .base import BaseFormatter
from ..models import QueryResult


class JsonFormatter(BaseFormatter):
    """Render results as one JSON object keyed by analysis name."""

    def render(self, results: List[QueryResult]) -> None:
        print(self.format(results))

    def format(self, results: List[QueryResult]) -> str:
        data = {
            r.name: {
                "question": r.question,
                "columns": list(r.columns),
                "rows": r.as_dicts(),
            }
            for r in results
        }
        return json.dumps(data, indent=2)
