"""Tests for the catalog analyses."""

import pytest

from netflix_insight import queries as q
from netflix_insight.config import InsightConfig
from netflix_insight.queries import REGISTRY


class TestEmptyCatalog:
    @pytest.mark.parametrize("name", sorted(REGISTRY))
    def test_every_query_returns_no_rows(self, name, config):
        assert REGISTRY[name].func((), config) == []


class TestOverview:
    def test_total_content(self, make_title, config):
        titles = [make_title(), make_title("TV Show")]
        assert q.total_content(titles, config) == [(2,)]

    def test_content_types_in_fixed_order(self, make_title, config):
        titles = [make_title("TV Show"), make_title("Movie")]
        assert q.content_types(titles, config) == [("Movie",), ("TV Show",)]


class TestContentTrend:
    def test_counts_per_year_ascending(self, make_title, config):
        titles = [
            make_title(release_year=2020),
            make_title(release_year=2018),
            make_title(release_year=2020),
            make_title(release_year=None),
        ]
        assert q.content_trend(titles, config) == [(2018, 1), (2020, 2)]

    def test_counts_sum_to_titles_with_year(self, make_title, config):
        titles = [make_title(release_year=y) for y in (2001, 2001, 2005, 2010, 2010, 2010)]
        titles.append(make_title(release_year=None))
        rows = q.content_trend(titles, config)
        assert sum(count for _, count in rows) == 6


class TestCastSizeByType:
    def test_blank_cast_counts_as_zero(self, make_title, config):
        titles = [make_title(cast="A, B, C"), make_title(cast="")]
        assert q.cast_size_by_type(titles, config) == [("Movie", 1.5)]

    def test_commas_counted_on_raw_text(self, make_title, config):
        # "A,,B" has two commas -> 3 actors, duplicates are not removed
        titles = [make_title("TV Show", cast="A,,B"), make_title("TV Show", cast="X, X")]
        assert q.cast_size_by_type(titles, config) == [("TV Show", 2.5)]

    def test_movie_listed_before_tv_show(self, make_title, config):
        titles = [make_title("TV Show", cast="A"), make_title("Movie", cast=None)]
        assert q.cast_size_by_type(titles, config) == [("Movie", 0.0), ("TV Show", 1.0)]

    def test_average_is_rounded_half_up(self, make_title, config):
        # (1 + 2 + 2) / 3 = 1.666.. -> 1.67
        titles = [make_title(cast="A"), make_title(cast="A, B"), make_title(cast="A, B")]
        assert q.cast_size_by_type(titles, config) == [("Movie", 1.67)]

    def test_actor_count_helper(self):
        assert q.actor_count(None) == 0
        assert q.actor_count("   ") == 0
        assert q.actor_count("Solo") == 1
        assert q.actor_count("A, B, C") == 3


class TestFastestGrowingGenres:
    @pytest.fixture
    def titles(self, make_title):
        layout = [
            (2016, "Dramas"),
            (2018, "Comedies"),
            (2018, "Comedies"),
            (2019, "Horror"),
            (2017, "Action"),
            (2020, "Dramas"),
            (2020, "Dramas"),
            (2020, " Dramas , Action"),
            (2021, "Comedies"),
            (2021, "Action"),
            (2021, "Action"),
            (2010, "Thrillers"),
        ]
        return [make_title(release_year=year, genres=genres) for year, genres in layout]

    def test_growth_between_first_and_last_year(self, titles, config):
        assert q.fastest_growing_genres(titles, config) == [
            ("Dramas", 1, 3, 200.0),
            ("Action", 1, 2, 100.0),
            ("Horror", 1, 1, 0.0),
            ("Comedies", 2, 1, -50.0),
        ]

    def test_titles_before_window_are_ignored(self, titles, config):
        genres = [row[0] for row in q.fastest_growing_genres(titles, config)]
        assert "Thrillers" not in genres

    def test_window_lower_bound_is_inclusive(self, titles):
        rows = q.fastest_growing_genres(titles, InsightConfig(current_year=2021, recent_years=11))
        assert rows[3] == ("Thrillers", 1, 1, 0.0)
        rows = q.fastest_growing_genres(titles, InsightConfig(current_year=2021, recent_years=10))
        assert "Thrillers" not in [r[0] for r in rows]

    def test_top_n_limit(self, titles):
        rows = q.fastest_growing_genres(titles, InsightConfig(current_year=2021, top_n=2))
        assert [r[0] for r in rows] == ["Dramas", "Action"]

    def test_ties_keep_first_seen_order(self, make_title, config):
        titles = [make_title(release_year=2020, genres="B"), make_title(release_year=2020, genres="A")]
        assert [r[0] for r in q.fastest_growing_genres(titles, config)] == ["B", "A"]


class TestTopDirectorCollaborations:
    def test_cross_join_within_title(self, make_title):
        titles = [make_title(director="Jane Doe, John Roe", cast="X, Y")]
        assert q.collaboration_pairs(titles) == {"Jane Doe": {"X", "Y"}, "John Roe": {"X", "Y"}}

    def test_director_with_most_distinct_actors(self, make_title, config):
        titles = [
            make_title(director="Jane Doe", cast="X, Y"),
            make_title(director="Jane Doe", cast="X"),
            make_title(director="Zed", cast="P, Q"),
            make_title(director="Zed", cast="R"),
        ]
        assert q.top_director_collaborations(titles, config) == [("Zed", 3)]

    def test_tie_goes_to_smallest_name(self, make_title, config):
        titles = [make_title(director="John Roe, Jane Doe", cast="X, Y")]
        assert q.top_director_collaborations(titles, config) == [("Jane Doe", 2)]

    def test_join_uses_row_identity_not_title_text(self, make_title):
        titles = [
            make_title(title="Same", director="D1", cast="A"),
            make_title(title="Same", director="D2", cast="B"),
        ]
        assert q.collaboration_pairs(titles) == {"D1": {"A"}, "D2": {"B"}}

    def test_titles_without_cast_do_not_count(self, make_title, config):
        titles = [make_title(director="Lonely", cast=None)]
        assert q.top_director_collaborations(titles, config) == []


class TestMaturityScore:
    def test_score_table(self):
        assert q.maturity_score("TV-MA") == 8
        assert q.maturity_score("TV-14") == 6
        assert q.maturity_score("NR") is None
        assert q.maturity_score(None) is None

    def test_average_per_type_ordered_by_score(self, make_title, config):
        titles = [
            make_title("Movie", rating="TV-MA"),
            make_title("Movie", rating="PG"),
            make_title("TV Show", rating="TV-Y"),
            make_title("TV Show", rating="NR"),
            make_title("TV Show", rating=None),
        ]
        assert q.maturity_score_by_type(titles, config) == [("TV Show", 1.0), ("Movie", 6.5)]


class TestMonthlyAdditions:
    def test_counts_by_month_name(self, make_title, config):
        titles = [
            make_title(date_added="September 25, 2021"),
            make_title(date_added=" September 24, 2021"),
            make_title(date_added="August 4, 2020"),
            make_title(date_added="garbage"),
            make_title(date_added=None),
            make_title(date_added="February 30, 2020"),
        ]
        assert q.monthly_additions(titles, config) == [("September", 2), ("August", 1)]

    def test_ties_in_calendar_order(self, make_title, config):
        titles = [make_title(date_added="March 1, 2020"), make_title(date_added="January 1, 2020")]
        assert q.monthly_additions(titles, config) == [("January", 1), ("March", 1)]

    def test_parse_date_added(self):
        assert q.parse_date_added("December 31, 2019").month == 12
        assert q.parse_date_added("2019-12-31") is None
        assert q.parse_date_added("Smarch 1, 2019") is None


class TestTvToMovieRatio:
    def test_highest_ratio(self, make_title, config):
        titles = [
            make_title("TV Show", country="India"),
            make_title("TV Show", country="India, Japan"),
            make_title("Movie", country="India"),
            make_title("TV Show", country="Japan"),
            make_title("Movie", country="United States"),
            make_title("TV Show", country="United States"),
        ]
        assert q.tv_to_movie_ratio_by_country(titles, config) == [("India", 2, 1, 2.0)]

    def test_countries_without_movies_are_excluded(self, make_title, config):
        titles = [make_title("TV Show", country="Japan")]
        assert q.tv_to_movie_ratio_by_country(titles, config) == []

    def test_tie_goes_to_smallest_name(self, make_title, config):
        titles = [
            make_title("TV Show", country="B"),
            make_title("Movie", country="B"),
            make_title("TV Show", country="A"),
            make_title("Movie", country="A"),
        ]
        assert q.tv_to_movie_ratio_by_country(titles, config) == [("A", 1, 1, 1.0)]

    def test_ratio_is_rounded(self, make_title, config):
        titles = [make_title("TV Show", country="C")] + [make_title("Movie", country="C") for _ in range(3)]
        assert q.tv_to_movie_ratio_by_country(titles, config) == [("C", 1, 3, 0.33)]


class TestActorGenreBreadth:
    def test_most_genres(self, make_title, config):
        titles = [
            make_title(cast="X, Y", genres="Dramas, Comedies"),
            make_title(cast="X", genres="Horror"),
            make_title(cast="Y", genres="Dramas"),
        ]
        assert q.actor_genre_breadth(titles, config) == [("X", 3)]

    def test_tie_goes_to_smallest_name(self, make_title, config):
        titles = [make_title(cast="Zoe, Abe", genres="Dramas")]
        assert q.actor_genre_breadth(titles, config) == [("Abe", 1)]

    def test_titles_without_genres_do_not_count(self, make_title, config):
        titles = [make_title(cast="X", genres=None)]
        assert q.actor_genre_breadth(titles, config) == []


class TestTitleLengths:
    @pytest.fixture
    def titles(self, make_title):
        names = ["Up", "It", "Roma", "A", "Inception", "The Irishman", "Heat", None]
        return [make_title(title=name) for name in names]

    def test_shortest_ties_in_row_order(self, titles, config):
        assert q.shortest_titles(titles, config) == [
            ("A", 1), ("Up", 2), ("It", 2), ("Roma", 4), ("Heat", 4),
        ]

    def test_longest_ties_in_row_order(self, titles, config):
        assert q.longest_titles(titles, config) == [
            ("The Irishman", 12), ("Inception", 9), ("Roma", 4), ("Heat", 4), ("Up", 2),
        ]

    def test_length_counts_characters(self, make_title, config):
        titles = [make_title(title="Amélie")]
        assert q.shortest_titles(titles, config) == [("Amélie", 6)]


class TestLoveAndWar:
    def test_case_insensitive_substrings(self):
        assert q.is_dual_theme("A story of Love during the War")
        assert q.is_dual_theme("Lovely warehouse")
        assert not q.is_dual_theme("Love only")
        assert not q.is_dual_theme(None)

    def test_trend_by_year(self, make_title, config):
        titles = [
            make_title(release_year=2019, description="Love and WAR"),
            make_title(release_year=2017, description="war, then love"),
            make_title(release_year=2019, description="lovers at war"),
            make_title(release_year=2019, description="just war"),
            make_title(release_year=None, description="love war"),
        ]
        assert q.love_and_war_trend(titles, config) == [(2017, 1), (2019, 2)]


class TestDocumentaryDominantCountries:
    def test_ratio_above_threshold(self, make_title, config):
        titles = [make_title(country="Chile", genres="Documentary")]
        titles += [make_title(country="Norway", genres="DOCUMENTARY, Dramas") for _ in range(3)]
        titles += [make_title(country="Norway", genres="Dramas")]
        titles += [make_title(country="Peru", genres="Documentary") for _ in range(7)]
        titles += [make_title(country="Peru", genres=None) for _ in range(3)]
        assert q.documentary_dominant_countries(titles, config) == [("Chile", 1.0), ("Norway", 0.75)]

    def test_custom_threshold(self, make_title):
        titles = [make_title(country="Peru", genres="Documentary"), make_title(country="Peru")]
        config = InsightConfig(documentary_threshold=0.4)
        assert q.documentary_dominant_countries(titles, config) == [("Peru", 0.5)]


class TestDirectorlessMoviePeakYear:
    def test_earliest_year_wins_ties(self, make_title, config):
        titles = [
            make_title(release_year=2019),
            make_title(release_year=2019, director=""),
            make_title(release_year=2020),
            make_title(release_year=2020),
            make_title(release_year=2018),
            make_title(release_year=None),
        ]
        titles += [make_title(release_year=2021, director="Someone") for _ in range(5)]
        titles += [make_title("TV Show", release_year=2021) for _ in range(5)]
        assert q.directorless_movie_peak_year(titles, config) == [(2019, 2)]


class TestOneHitWonderDirectors:
    def test_exactly_one_title(self, make_title, config):
        titles = [make_title(director="A, B"), make_title(director="A"), make_title(director=" C ")]
        assert q.one_hit_wonder_directors(titles, config) == [("B", 1), ("C", 1)]


class TestMedianSeasonsByCountry:
    def test_continuous_median(self, make_title, config):
        titles = [
            make_title("TV Show", country="India", duration="2 Seasons"),
            make_title("TV Show", country="India", duration="1 Season"),
            make_title("TV Show", country="India", duration="4 Seasons"),
            make_title("TV Show", country="Spain, India", duration="3 Seasons"),
            make_title("TV Show", country="Japan", duration="1 Season"),
            make_title("TV Show", country="Japan", duration="2 Seasons"),
            make_title("TV Show", country="India", duration="Limited Series"),
            make_title("Movie", country="India", duration="90 min"),
        ]
        assert q.median_seasons_by_country(titles, config) == [
            ("India", 2.5),
            ("Japan", 1.5),
            ("Spain", 3.0),
        ]

    def test_odd_count_is_middle_value(self, make_title, config):
        titles = [make_title("TV Show", country="X", duration=f"{n} Seasons") for n in (9, 1, 4)]
        assert q.median_seasons_by_country(titles, config) == [("X", 4.0)]

    def test_parse_seasons(self):
        assert q.parse_seasons("1 Season") == 1
        assert q.parse_seasons("12 Seasons") == 12
        assert q.parse_seasons("90 min") is None
        assert q.parse_seasons(None) is None


class TestMaturityCategoryShare:
    def test_unknown_counts_in_denominator_only(self, make_title, config):
        titles = [
            make_title(release_year=2020, rating="TV-MA"),
            make_title(release_year=2020, rating="R"),
            make_title(release_year=2020, rating="PG"),
            make_title(release_year=2020, rating="NR"),
            make_title(release_year=2021, rating="TV-14"),
            make_title(release_year=None, rating="TV-14"),
        ]
        assert q.maturity_category_share(titles, config) == [
            (2020, "Adult", 50.0),
            (2020, "Family", 25.0),
            (2021, "Teen", 100.0),
        ]

    def test_shares_are_rounded(self, make_title, config):
        titles = [make_title(release_year=2019, rating=r) for r in ("TV-Y", "TV-Y", "R")]
        assert q.maturity_category_share(titles, config) == [
            (2019, "Adult", 33.33),
            (2019, "Family", 66.67),
        ]

    def test_category_buckets(self):
        assert q.maturity_category("G") == "Family"
        assert q.maturity_category("TV-PG") == "Teen"
        assert q.maturity_category("NC-17") == "Adult"
        assert q.maturity_category("UR") == "Unknown"
        assert q.maturity_category(None) == "Unknown"
