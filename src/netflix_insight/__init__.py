"""
Netflix Insight - descriptive analytics over a Netflix catalog export

Loads one flat table of catalog metadata (type, title, cast, country, genres,
rating, duration, dates) and answers a fixed set of business questions about
it: release trends, genre growth, collaboration graphs, maturity profiles,
seasonality and country-level ratios.
"""

__version__ = "0.1.0"
__author__ = "Naman Agarwal"

from .api import analyze
from .engine import QueryEngine
from .loader import load_catalog, parse_rows
from .models import Catalog, ContentKind, QueryResult, Title

__all__ = [
    "analyze",  # Main entry point
    "load_catalog",
    "parse_rows",
    "QueryEngine",
    "Catalog",
    "ContentKind",
    "QueryResult",
    "Title",
]
