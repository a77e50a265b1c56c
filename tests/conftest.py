"""Pytest configuration and shared fixtures.

This module provides fixtures for testing shelfwise, including an
in-memory database, sample books and fake series store/book source
collaborators for the reading order engine.
"""

import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Callable, Generator, Optional, Sequence

import pytest

from shelfwise.config import reset_config
from shelfwise.db.schemas import BookCreate
from shelfwise.db.sqlite import Database, reset_db
from shelfwise.readingorder import (
    BookRecord,
    BookSource,
    ReadingOrderMode,
    SeriesRecord,
    SeriesStore,
)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
def db() -> Database:
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    database.create_tables()
    return database


@pytest.fixture(scope="function")
def temp_db_path() -> Generator[Path, None, None]:
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)
    yield db_path
    # Cleanup
    if db_path.exists():
        db_path.unlink()


@pytest.fixture(scope="function")
def env_db(temp_db_path: Path) -> Generator[Path, None, None]:
    """Point the global database at a temporary file."""
    reset_db()
    reset_config()
    os.environ["SHELFWISE_DB_PATH"] = str(temp_db_path)

    yield temp_db_path

    reset_db()
    reset_config()
    if "SHELFWISE_DB_PATH" in os.environ:
        del os.environ["SHELFWISE_DB_PATH"]


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def make_book() -> Callable[..., BookRecord]:
    """Factory for BookRecord instances."""

    def _make(
        book_id: str,
        title: Optional[str] = None,
        published: Optional[date] = None,
        chrono: Optional[float] = None,
    ) -> BookRecord:
        return BookRecord(
            id=book_id,
            title=title if title is not None else f"Book {book_id}",
            publication_date=published,
            chronological_position=chrono,
        )

    return _make


@pytest.fixture
def sample_book_data() -> BookCreate:
    """Create sample book data for testing."""
    return BookCreate(
        title="The Fellowship of the Ring",
        author="J.R.R. Tolkien",
        publication_date=date(1954, 7, 29),
        chronological_position=2,
    )


@pytest.fixture
def trilogy(db: Database) -> list:
    """Create three books in the database, published out of title order."""
    books_data = [
        BookCreate(title="A", publication_date=date(2020, 1, 1)),
        BookCreate(title="B", publication_date=date(2019, 1, 1)),
        BookCreate(title="C", publication_date=date(2021, 1, 1)),
    ]
    return [db.create_book(data) for data in books_data]


# ============================================================================
# Fake Collaborators
# ============================================================================


class FakeSeriesStore(SeriesStore):
    """In-memory series store that records every write."""

    def __init__(self):
        self.series: dict[str, SeriesRecord] = {}
        self.writes: list[tuple[str, ReadingOrderMode, Optional[list[str]]]] = []
        self.fail_on_write: Optional[Exception] = None

    def add(self, series: SeriesRecord) -> SeriesRecord:
        self.series[series.id] = series
        return series

    def get_series(self, series_id: str) -> Optional[SeriesRecord]:
        series = self.series.get(series_id)
        return series.model_copy(deep=True) if series else None

    def set_reading_order(
        self,
        series_id: str,
        mode: ReadingOrderMode,
        custom_order: Optional[Sequence[str]],
    ) -> Optional[SeriesRecord]:
        if self.fail_on_write is not None:
            raise self.fail_on_write
        if series_id not in self.series:
            return None

        order = list(custom_order) if custom_order is not None else None
        self.writes.append((series_id, ReadingOrderMode(mode), order))
        updated = self.series[series_id].model_copy(
            update={"reading_order": ReadingOrderMode(mode).value, "custom_order": order}
        )
        self.series[series_id] = updated
        return updated.model_copy(deep=True)


class FakeBookSource(BookSource):
    """In-memory book source keyed by series ID."""

    def __init__(self):
        self.books: dict[str, list[BookRecord]] = {}

    def get_books(self, series_id: str) -> list[BookRecord]:
        return list(self.books.get(series_id, []))


@pytest.fixture
def series_store() -> FakeSeriesStore:
    """Create an empty fake series store."""
    return FakeSeriesStore()


@pytest.fixture
def book_source() -> FakeBookSource:
    """Create an empty fake book source."""
    return FakeBookSource()


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner
    return CliRunner()
