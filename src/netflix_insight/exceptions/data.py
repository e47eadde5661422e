"""Data-related exceptions: unreadable sources, malformed rows, empty input."""

from pathlib import Path
from typing import Optional

from .base import NetflixInsightError


class DataError(NetflixInsightError):
    """Base class for errors raised while loading catalog data."""

    pass


class DataSourceError(DataError):
    """Raised when the data file cannot be opened or decoded."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot read data source: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class ParseError(DataError):
    """Raised when a single cell of a row cannot be parsed.

    Row-scoped: the loader skips or degrades the offending row unless it runs
    in strict mode.
    """

    def __init__(self, row_number: int, field: str, value: Optional[str], reason: str):
        super().__init__(
            f"Cannot parse {field} on row {row_number}",
            details={"row": str(row_number), "field": field, "value": repr(value), "reason": reason},
        )
        self.row_number = row_number
        self.field = field
        self.value = value
        self.reason = reason


class EmptyInputError(DataError):
    """Raised when no rows were loaded and the caller requires data."""

    def __init__(self, source: str):
        super().__init__(f"No titles loaded from {source}", details={"source": source})
        self.source = source
