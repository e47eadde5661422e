"""Public API for Netflix Insight.

Example:
    >>> from netflix_insight import analyze
    >>>
    >>> results = analyze("netflix_titles.csv")
    >>>
    >>> # A subset, with overrides
    >>> results = analyze(
    ...     "netflix_titles.csv",
    ...     queries=["content_trend", "median_seasons_by_country"],
    ...     current_year=2021,
    ... )
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Union

from .config import load_config
from .engine import QueryEngine
from .loader import load_catalog
from .logging_config import get_logger
from .models import QueryResult

logger = get_logger(__name__)


def analyze(
    path: Union[str, Path],
    queries: Optional[Iterable[str]] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> List[QueryResult]:
    """Load a catalog file and run analyses over it.

    Args:
        path: Delimited data file
        queries: Analysis names to run (default: all, in registry order)
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g., current_year=2021, strict=True)

    Returns:
        One QueryResult per requested analysis, in request order

    Raises:
        NetflixInsightError: If configuration, data or a query name is invalid
    """
    config = load_config(config_file=config_file, **overrides)
    catalog = load_catalog(path, config)
    logger.info("Analyzing %d titles", len(catalog))
    return QueryEngine(catalog, config).run_all(queries)
