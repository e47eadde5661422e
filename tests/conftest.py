"""Shared test fixtures for Netflix Insight tests."""

from pathlib import Path

import pytest

from netflix_insight.config import InsightConfig
from netflix_insight.models import Catalog, ContentKind, Title

FIXTURES = Path(__file__).parent / "fixtures"


class TitleFactory:
    """Builds Titles with consecutive row ids."""

    def __init__(self):
        self.next_id = 0

    def __call__(self, kind="Movie", **fields):
        title = Title(row_id=self.next_id, kind=ContentKind(kind), **fields)
        self.next_id += 1
        return title


@pytest.fixture
def make_title():
    """Factory for Title records: make_title("TV Show", cast="A, B")."""
    return TitleFactory()


@pytest.fixture
def config():
    """Configuration pinned to a fixed reference year."""
    return InsightConfig(current_year=2021)


@pytest.fixture
def empty_catalog():
    """Catalog with no titles."""
    return Catalog.from_titles([])


@pytest.fixture
def sample_csv():
    """Small export in the original column layout, with two bad rows and a blank line."""
    return FIXTURES / "netflix_sample.csv"
