"""Data models for Netflix Insight"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


def explode(value: Optional[str]) -> List[str]:
    """Split a comma-separated cell into trimmed, non-empty elements.

    ``None`` and blank strings explode to nothing. Duplicates are kept, so an
    element listed twice contributes two rows.
    """
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


class ContentKind(Enum):
    """The two kinds of catalog entry."""

    MOVIE = "Movie"
    TV_SHOW = "TV Show"

    @classmethod
    def parse(cls, raw: str) -> "ContentKind":
        """Map a source ``type`` cell to a kind.

        Accepts the canonical labels plus the spacing variant ``TVShow``.

        Raises:
            ValueError: If the label is not recognized
        """
        normalized = raw.strip().replace(" ", "").lower()
        for kind in cls:
            if kind.value.replace(" ", "").lower() == normalized:
                return kind
        raise ValueError(f"expected one of {', '.join(k.value for k in cls)}")


@dataclass(frozen=True)
class Title:
    """One catalog row.

    ``None`` marks a missing cell. List-valued fields keep the raw source text;
    use the exploding accessors to get their elements.
    """

    row_id: int
    kind: ContentKind
    show_id: Optional[str] = None
    title: Optional[str] = None
    director: Optional[str] = None
    cast: Optional[str] = None
    country: Optional[str] = None
    date_added: Optional[str] = None
    release_year: Optional[int] = None
    rating: Optional[str] = None
    duration: Optional[str] = None
    genres: Optional[str] = None
    description: Optional[str] = None

    def directors(self) -> List[str]:
        return explode(self.director)

    def cast_members(self) -> List[str]:
        return explode(self.cast)

    def countries(self) -> List[str]:
        return explode(self.country)

    def genre_list(self) -> List[str]:
        return explode(self.genres)


@dataclass(frozen=True)
class RowProblem:
    """A cell the loader could not use."""

    row_number: int
    field: str
    value: Optional[str]
    reason: str
    dropped: bool


@dataclass
class LoadReport:
    """Bookkeeping produced while loading a catalog."""

    source: str
    rows_read: int = 0
    rows_loaded: int = 0
    problems: List[RowProblem] = field(default_factory=list)

    @property
    def rows_dropped(self) -> int:
        return self.rows_read - self.rows_loaded


@dataclass(frozen=True)
class Catalog:
    """Immutable snapshot of loaded titles, shared read-only by all queries."""

    titles: Tuple[Title, ...]
    report: Optional[LoadReport] = None

    def __len__(self) -> int:
        return len(self.titles)

    def __iter__(self):
        return iter(self.titles)

    @classmethod
    def from_titles(cls, titles, report: Optional[LoadReport] = None) -> "Catalog":
        return cls(titles=tuple(titles), report=report)


@dataclass
class QueryResult:
    """Ordered tabular output of one analysis."""

    name: str
    question: str
    columns: Tuple[str, ...]
    rows: List[Tuple[Any, ...]] = field(default_factory=list)

    def as_dicts(self) -> List[Dict[str, Any]]:
        return [dict(zip(self.columns, row)) for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)
