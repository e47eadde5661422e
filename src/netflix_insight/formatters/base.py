"""Base formatter interface for Netflix Insight output rendering."""

from abc import ABC, abstractmethod
from typing import List

from ..models import QueryResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters.

    Formatters display values as given and keep the row order of each result.
    """

    @abstractmethod
    def render(self, results: List[QueryResult]) -> None:
        """Render results to stdout."""

    @abstractmethod
    def format(self, results: List[QueryResult]) -> str:
        """Return formatted string representation of results."""
