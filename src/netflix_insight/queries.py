"""The catalog analyses.

Each analysis is a pure function of the loaded titles and the configuration,
registered under a stable name with the question it answers and the columns
of the rows it returns. Functions never mutate their input; an empty catalog
yields no rows.

Ties in "top 1" analyses are broken deterministically:
    - top_director_collaborations: smallest director name
    - tv_to_movie_ratio_by_country: smallest country name
    - actor_genre_breadth: smallest actor name
    - directorless_movie_peak_year: earliest year
    - fastest_growing_genres: first-seen genre in row order
"""

from __future__ import annotations

import re
from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from .config import InsightConfig
from .models import ContentKind, Title
from .stats import percentile_cont, ratio, round_half_up, rounded_mean

Row = Tuple
QueryFunc = Callable[[Sequence[Title], InsightConfig], List[Row]]

MATURITY_SCORES: Dict[str, int] = {
    "TV-Y": 1,
    "TV-Y7": 2,
    "TV-G": 3,
    "TV-PG": 4,
    "PG": 5,
    "PG-13": 6,
    "TV-14": 6,
    "R": 7,
    "NC-17": 8,
    "TV-MA": 8,
}

MATURITY_CATEGORIES: Dict[str, frozenset] = {
    "Family": frozenset({"TV-Y", "TV-Y7", "TV-G", "G", "PG"}),
    "Teen": frozenset({"PG-13", "TV-PG", "TV-14"}),
    "Adult": frozenset({"R", "NC-17", "TV-MA"}),
}
UNKNOWN_CATEGORY = "Unknown"

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_MONTH_NUMBERS = {name.lower(): i for i, name in enumerate(MONTHS, start=1)}

_DATE_ADDED_RE = re.compile(r"^([A-Za-z]+)\s+(\d{1,2}),\s*(\d{4})$")
_SEASONS_RE = re.compile(r"^(\d+)\s+Seasons?$", re.IGNORECASE)


@dataclass(frozen=True)
class QuerySpec:
    """A registered analysis."""

    name: str
    question: str
    columns: Tuple[str, ...]
    func: QueryFunc


REGISTRY: Dict[str, QuerySpec] = {}


def query(name: str, question: str, columns: Tuple[str, ...]):
    """Register an analysis under ``name``."""

    def decorator(func: QueryFunc) -> QueryFunc:
        REGISTRY[name] = QuerySpec(name=name, question=question, columns=columns, func=func)
        return func

    return decorator


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def is_blank(value: Optional[str]) -> bool:
    """Missing and empty are the same thing to a filter."""
    return value is None or not value.strip()


def actor_count(cast: Optional[str]) -> int:
    """Commas in the raw cast text plus one; zero when there is no cast."""
    if is_blank(cast):
        return 0
    return cast.count(",") + 1


def maturity_category(rating: Optional[str]) -> str:
    if rating is not None:
        rating = rating.strip()
        for category, ratings in MATURITY_CATEGORIES.items():
            if rating in ratings:
                return category
    return UNKNOWN_CATEGORY


def maturity_score(rating: Optional[str]) -> Optional[int]:
    if rating is None:
        return None
    return MATURITY_SCORES.get(rating.strip())


def parse_date_added(raw: Optional[str]) -> Optional[date]:
    """Parse "Month DD, YYYY"; anything else gives None."""
    if is_blank(raw):
        return None
    match = _DATE_ADDED_RE.match(raw.strip())
    if not match:
        return None
    month = _MONTH_NUMBERS.get(match.group(1).lower())
    if month is None:
        return None
    try:
        return date(int(match.group(3)), month, int(match.group(2)))
    except ValueError:
        return None


def parse_seasons(duration: Optional[str]) -> Optional[int]:
    """Leading integer of an "N Season(s)" duration, else None."""
    if is_blank(duration):
        return None
    match = _SEASONS_RE.match(duration.strip())
    return int(match.group(1)) if match else None


def _kind_order(kind: ContentKind) -> int:
    return list(ContentKind).index(kind)


def _with_year(titles: Sequence[Title]) -> List[Title]:
    return [t for t in titles if t.release_year is not None]


# ---------------------------------------------------------------------------
# Catalog overview
# ---------------------------------------------------------------------------


@query("total_content", "How many titles are in the catalog?", ("total_content",))
def total_content(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    if not titles:
        return []
    return [(len(titles),)]


@query("content_types", "Which content types does the catalog contain?", ("type",))
def content_types(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    present = {t.kind for t in titles}
    return [(kind.value,) for kind in ContentKind if kind in present]


# ---------------------------------------------------------------------------
# The fifteen business questions
# ---------------------------------------------------------------------------


@query(
    "content_trend",
    "How many titles were released each year?",
    ("release_year", "total_titles"),
)
def content_trend(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    counts = Counter(t.release_year for t in _with_year(titles))
    return sorted(counts.items())


@query(
    "cast_size_by_type",
    "Do movies or TV shows have larger casts on average?",
    ("type", "avg_actors_per_title"),
)
def cast_size_by_type(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    by_kind: Dict[ContentKind, List[int]] = defaultdict(list)
    for t in titles:
        by_kind[t.kind].append(actor_count(t.cast))
    return [
        (kind.value, rounded_mean(counts))
        for kind, counts in sorted(by_kind.items(), key=lambda kv: _kind_order(kv[0]))
    ]


@query(
    "fastest_growing_genres",
    "Which genres grew fastest over the recent release years?",
    ("genre", "start_count", "end_count", "growth_percent"),
)
def fastest_growing_genres(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    since = config.reference_year - config.recent_years

    # Insertion order of these dicts is first-seen genre order
    year_span: Dict[str, List[int]] = {}
    counts: Counter = Counter()
    for t in titles:
        if t.release_year is None or t.release_year < since:
            continue
        for genre in t.genre_list():
            span = year_span.setdefault(genre, [t.release_year, t.release_year])
            span[0] = min(span[0], t.release_year)
            span[1] = max(span[1], t.release_year)
            counts[(genre, t.release_year)] += 1

    rows = []
    for genre, (first_year, last_year) in year_span.items():
        start = counts[(genre, first_year)]
        end = counts[(genre, last_year)]
        growth = None if start == 0 else round_half_up(ratio(end - start, start, genre) * 100)
        rows.append((genre, start, end, growth))

    rows.sort(key=lambda r: (r[3] is None, -(r[3] or 0.0)))
    return rows[: config.top_n]


@query(
    "top_director_collaborations",
    "Which director has worked with the most distinct actors?",
    ("director", "unique_actor_count"),
)
def top_director_collaborations(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    actors_by_director = collaboration_pairs(titles)
    if not actors_by_director:
        return []
    director, actors = min(actors_by_director.items(), key=lambda kv: (-len(kv[1]), kv[0]))
    return [(director, len(actors))]


def collaboration_pairs(titles: Sequence[Title]) -> Dict[str, Set[str]]:
    """Distinct actors per director, joining fields of the same title."""
    pairs: Dict[str, Set[str]] = defaultdict(set)
    for t in titles:
        cast = t.cast_members()
        for director in t.directors():
            pairs[director].update(cast)
    return {d: actors for d, actors in pairs.items() if actors}


@query(
    "maturity_score_by_type",
    "Which content type skews more family-friendly by rating?",
    ("type", "avg_maturity_score"),
)
def maturity_score_by_type(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    by_kind: Dict[ContentKind, List[int]] = defaultdict(list)
    for t in titles:
        score = maturity_score(t.rating)
        if score is not None:
            by_kind[t.kind].append(score)
    rows = [(kind, rounded_mean(scores)) for kind, scores in by_kind.items()]
    rows.sort(key=lambda r: (r[1], _kind_order(r[0])))
    return [(kind.value, score) for kind, score in rows]


@query(
    "monthly_additions",
    "In which month is the most content added?",
    ("month", "titles_added"),
)
def monthly_additions(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    counts: Counter = Counter()
    for t in titles:
        added = parse_date_added(t.date_added)
        if added is not None:
            counts[added.month] += 1
    ordered = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return [(MONTHS[month - 1], count) for month, count in ordered]


@query(
    "tv_to_movie_ratio_by_country",
    "Which country has the highest ratio of TV shows to movies?",
    ("country", "tv_show_count", "movie_count", "tv_show_to_movie_ratio"),
)
def tv_to_movie_ratio_by_country(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    tv_counts: Counter = Counter()
    movie_counts: Counter = Counter()
    for t in titles:
        target = movie_counts if t.kind is ContentKind.MOVIE else tv_counts
        for country in t.countries():
            target[country] += 1

    rows = [
        (country, tv_counts[country], movies, round_half_up(ratio(tv_counts[country], movies, country)))
        for country, movies in movie_counts.items()
        if movies > 0
    ]
    if not rows:
        return []
    return [min(rows, key=lambda r: (-r[3], r[0]))]


@query(
    "actor_genre_breadth",
    "Which actor has appeared across the most genres?",
    ("actor", "unique_genre_count"),
)
def actor_genre_breadth(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    genres_by_actor: Dict[str, Set[str]] = defaultdict(set)
    for t in titles:
        genres = t.genre_list()
        if not genres:
            continue
        for actor in t.cast_members():
            genres_by_actor[actor].update(genres)
    if not genres_by_actor:
        return []
    actor, genres = min(genres_by_actor.items(), key=lambda kv: (-len(kv[1]), kv[0]))
    return [(actor, len(genres))]


@query("shortest_titles", "Which titles have the shortest names?", ("title", "title_length"))
def shortest_titles(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    named = [t.title for t in titles if t.title is not None]
    return [(name, len(name)) for name in sorted(named, key=len)[: config.top_n]]


@query("longest_titles", "Which titles have the longest names?", ("title", "title_length"))
def longest_titles(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    named = [t.title for t in titles if t.title is not None]
    return [(name, len(name)) for name in sorted(named, key=lambda n: -len(n))[: config.top_n]]


@query(
    "love_and_war_trend",
    "How many titles per year mention both love and war?",
    ("release_year", "count_dual_theme"),
)
def love_and_war_trend(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    counts = Counter(t.release_year for t in _with_year(titles) if is_dual_theme(t.description))
    return sorted(counts.items())


def is_dual_theme(description: Optional[str], themes: Tuple[str, ...] = ("love", "war")) -> bool:
    if description is None:
        return False
    text = description.lower()
    return all(theme in text for theme in themes)


@query(
    "documentary_dominant_countries",
    "Which countries produce mostly documentaries?",
    ("country", "documentary_ratio"),
)
def documentary_dominant_countries(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    totals: Counter = Counter()
    documentaries: Counter = Counter()
    for t in titles:
        is_documentary = t.genres is not None and "documentary" in t.genres.lower()
        for country in t.countries():
            totals[country] += 1
            if is_documentary:
                documentaries[country] += 1

    threshold = Decimal(repr(config.documentary_threshold))
    rows = []
    for country, total in totals.items():
        share = ratio(documentaries[country], total, country)
        if share > threshold:
            rows.append((country, float(share)))
    rows.sort(key=lambda r: (-r[1], r[0]))
    return rows


@query(
    "directorless_movie_peak_year",
    "In which release year are movies most often missing a director?",
    ("release_year", "count_movies"),
)
def directorless_movie_peak_year(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    counts = Counter(
        t.release_year
        for t in _with_year(titles)
        if t.kind is ContentKind.MOVIE and is_blank(t.director)
    )
    if not counts:
        return []
    return [min(counts.items(), key=lambda kv: (-kv[1], kv[0]))]


@query(
    "one_hit_wonder_directors",
    "Which directors have exactly one title in the catalog?",
    ("director", "title_count"),
)
def one_hit_wonder_directors(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    counts = Counter(director for t in titles for director in t.directors())
    return sorted((name, count) for name, count in counts.items() if count == 1)


@query(
    "median_seasons_by_country",
    "What is the median number of seasons for TV shows in each country?",
    ("country", "median_seasons"),
)
def median_seasons_by_country(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    seasons_by_country: Dict[str, List[int]] = defaultdict(list)
    for t in titles:
        if t.kind is not ContentKind.TV_SHOW:
            continue
        seasons = parse_seasons(t.duration)
        if seasons is None:
            continue
        for country in t.countries():
            seasons_by_country[country].append(seasons)
    return [
        (country, percentile_cont(seasons, 50))
        for country, seasons in sorted(seasons_by_country.items())
    ]


@query(
    "maturity_category_share",
    "What share of each year's titles is Family, Teen or Adult content?",
    ("release_year", "maturity_category", "percentage_share"),
)
def maturity_category_share(titles: Sequence[Title], config: InsightConfig) -> List[Row]:
    counts: Counter = Counter()
    totals: Counter = Counter()
    for t in _with_year(titles):
        counts[(t.release_year, maturity_category(t.rating))] += 1
        totals[t.release_year] += 1

    return [
        (year, category, round_half_up(ratio(count, totals[year], str(year)) * 100))
        for (year, category), count in sorted(counts.items())
        if category != UNKNOWN_CATEGORY
    ]
