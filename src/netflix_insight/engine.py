"""Query engine: runs registered analyses against a loaded catalog."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .config import DEFAULT_CONFIG, InsightConfig
from .exceptions import UnknownQueryError
from .logging_config import get_logger
from .models import Catalog, QueryResult
from .queries import REGISTRY, QuerySpec

logger = get_logger(__name__)


class QueryEngine:
    """Evaluate analyses over an immutable catalog.

    The catalog is shared read-only, so one engine can serve any number of
    ``run`` calls.

    Usage::

        engine = QueryEngine(load_catalog("netflix_titles.csv"))
        trend = engine.run("content_trend")
        everything = engine.run_all()
    """

    def __init__(self, catalog: Catalog, config: InsightConfig = DEFAULT_CONFIG) -> None:
        self.catalog = catalog
        self.config = config

    @staticmethod
    def available() -> List[QuerySpec]:
        """Registered analyses in definition order."""
        return list(REGISTRY.values())

    def run(self, name: str) -> QueryResult:
        """Run one analysis by name.

        Raises:
            UnknownQueryError: If no analysis is registered under ``name``
        """
        entry = REGISTRY.get(name)
        if entry is None:
            raise UnknownQueryError(name, list(REGISTRY))

        logger.debug("Running %s over %d titles", name, len(self.catalog))
        rows = entry.func(self.catalog.titles, self.config)
        logger.debug("%s returned %d row(s)", name, len(rows))
        return QueryResult(name=entry.name, question=entry.question, columns=entry.columns, rows=rows)

    def run_all(self, names: Optional[Iterable[str]] = None) -> List[QueryResult]:
        """Run the named analyses (all of them by default) in order."""
        if names is None:
            names = list(REGISTRY)
        return [self.run(name) for name in names]
