"""Catalog loader: delimited text -> immutable Catalog of Title records.

The loader is the only place that sees raw cells. It normalizes blank cells to
``None``, parses ``type`` and ``release_year``, and assigns each kept row a
``row_id`` in source order. Malformed cells are row-scoped problems: in the
default lenient mode they are logged and recorded in the LoadReport, in strict
mode the ParseError propagates.
"""

from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .config import DEFAULT_CONFIG, FIELD_ORDER, InsightConfig
from .exceptions import DataSourceError, EmptyInputError, ParseError
from .logging_config import get_logger
from .models import Catalog, ContentKind, LoadReport, RowProblem, Title

logger = get_logger(__name__)

# Header spellings accepted for each logical field, first match wins
COLUMN_ALIASES: Dict[str, tuple] = {
    "show_id": ("show_id", "id"),
    "type": ("type", "kind"),
    "title": ("title",),
    "director": ("director",),
    "cast": ("casts", "cast", "cast_list"),
    "country": ("country", "country_list"),
    "date_added": ("date_added",),
    "release_year": ("release_year",),
    "rating": ("rating",),
    "duration": ("duration",),
    "genres": ("listed_in", "genres", "genre_list"),
    "description": ("description",),
}

_YEAR_RE = re.compile(r"^\d{4}$")


def load_catalog(path: Union[str, Path], config: InsightConfig = DEFAULT_CONFIG) -> Catalog:
    """Read a delimited file into a Catalog.

    Args:
        path: Path to the data file
        config: Source format and loading behaviour

    Returns:
        Catalog with one Title per accepted row

    Raises:
        DataSourceError: If the file cannot be opened or decoded
        ParseError: In strict mode, on the first malformed cell
        EmptyInputError: If ``config.require_rows`` is set and nothing loaded
    """
    path = Path(path)
    if not path.is_file():
        raise DataSourceError(path, "file not found")

    try:
        with open(path, newline="", encoding=config.encoding) as f:
            reader = csv.reader(f, delimiter=config.delimiter)
            return parse_rows(reader, config, source=str(path))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise DataSourceError(path, str(e))


def parse_rows(
    rows: Iterable[Sequence[str]],
    config: InsightConfig = DEFAULT_CONFIG,
    source: str = "<rows>",
) -> Catalog:
    """Build a Catalog from already-split rows (header first if configured)."""
    report = LoadReport(source=source)
    titles: List[Title] = []

    iterator = iter(rows)
    first_record = 1
    if config.has_header:
        header = next(iterator, None)
        if header is None:
            return _finish(titles, report, config)
        positions = _resolve_columns(header, config, source)
        first_record = 2
    else:
        positions = _positional_columns(config)

    for record_number, row in enumerate(iterator, start=first_record):
        if not row or all(not cell.strip() for cell in row):
            continue
        report.rows_read += 1
        cells = {name: _cell(row, index) for name, index in positions.items()}

        try:
            title = _build_title(len(titles), record_number, cells, report, config)
        except ParseError as e:
            if config.strict:
                raise
            logger.warning("Skipping row %d: %s", record_number, e)
            report.problems.append(RowProblem(record_number, e.field, e.value, e.reason, dropped=True))
            continue

        titles.append(title)

    return _finish(titles, report, config)


def parse_release_year(raw: Optional[str], row_number: int = 0) -> Optional[int]:
    """Parse a release year cell.

    Blank/missing -> None; anything but a four-digit number -> ParseError.
    """
    if raw is None:
        return None
    if not _YEAR_RE.match(raw.strip()):
        raise ParseError(row_number, "release_year", raw, "expected a four-digit year")
    return int(raw.strip())


def _build_title(
    row_id: int,
    record_number: int,
    cells: Dict[str, Optional[str]],
    report: LoadReport,
    config: InsightConfig,
) -> Title:
    raw_kind = cells.get("type")
    if raw_kind is None:
        raise ParseError(record_number, "type", raw_kind, "missing content type")
    try:
        kind = ContentKind.parse(raw_kind)
    except ValueError as e:
        raise ParseError(record_number, "type", raw_kind, str(e))

    try:
        release_year = parse_release_year(cells.get("release_year"), record_number)
    except ParseError as e:
        if config.strict:
            raise
        # Keep the row; only year-based queries lose it
        logger.warning("Row %d: %s; release year treated as missing", record_number, e)
        report.problems.append(RowProblem(record_number, e.field, e.value, e.reason, dropped=False))
        release_year = None

    return Title(
        row_id=row_id,
        kind=kind,
        show_id=cells.get("show_id"),
        title=cells.get("title"),
        director=cells.get("director"),
        cast=cells.get("cast"),
        country=cells.get("country"),
        date_added=cells.get("date_added"),
        release_year=release_year,
        rating=cells.get("rating"),
        duration=cells.get("duration"),
        genres=cells.get("genres"),
        description=cells.get("description"),
    )


def _cell(row: Sequence[str], index: Optional[int]) -> Optional[str]:
    """Return the raw, untrimmed cell, or None when absent or blank."""
    if index is None or index >= len(row):
        return None
    value = row[index]
    if not value.strip():
        return None
    return value


def _resolve_columns(header: Sequence[str], config: InsightConfig, source: str) -> Dict[str, Optional[int]]:
    # A leading byte-order mark is not part of the first column name
    normalized = {name.lstrip("\ufeff").strip().lower(): i for i, name in enumerate(header)}
    positions: Dict[str, Optional[int]] = {}

    for name in FIELD_ORDER:
        if name in config.columns:
            candidates = (config.columns[name],)
        else:
            candidates = COLUMN_ALIASES[name]
        positions[name] = next(
            (normalized[c.strip().lower()] for c in candidates if c.strip().lower() in normalized),
            None,
        )

    if positions["type"] is None:
        raise DataSourceError(Path(source), "no column for content type in header")

    missing = [name for name, index in positions.items() if index is None]
    if missing:
        logger.warning("Columns not found in %s, treated as missing: %s", source, ", ".join(missing))

    return positions


def _positional_columns(config: InsightConfig) -> Dict[str, Optional[int]]:
    # Without a header, column overrides are ignored and FIELD_ORDER applies
    if config.columns:
        logger.warning("Column mapping ignored: file has no header row")
    return {name: i for i, name in enumerate(FIELD_ORDER)}


def _finish(titles: List[Title], report: LoadReport, config: InsightConfig) -> Catalog:
    report.rows_loaded = len(titles)
    logger.info(
        "Loaded %d of %d rows from %s (%d problem(s))",
        report.rows_loaded,
        report.rows_read,
        report.source,
        len(report.problems),
    )
    if not titles and config.require_rows:
        raise EmptyInputError(report.source)
    return Catalog.from_titles(titles, report)
