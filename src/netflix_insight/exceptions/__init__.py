"""Exception hierarchy for Netflix Insight."""

from .base import NetflixInsightError
from .config import ConfigurationError, InvalidConfigError
from .data import DataError, DataSourceError, EmptyInputError, ParseError
from .query import DivisionGuardError, QueryError, UnknownQueryError

__all__ = [
    "NetflixInsightError",
    "ConfigurationError",
    "InvalidConfigError",
    "DataError",
    "DataSourceError",
    "ParseError",
    "EmptyInputError",
    "QueryError",
    "UnknownQueryError",
    "DivisionGuardError",
]
