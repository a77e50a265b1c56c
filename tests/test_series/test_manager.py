"""Tests for SeriesManager."""

import pytest
from sqlalchemy.exc import OperationalError

from shelfwise.readingorder import ReadingOrderManager, ReadingOrderMode
from shelfwise.series import SeriesBookSource, SeriesManager
from shelfwise.series.models import Series
from shelfwise.series.schemas import SeriesCreate, SeriesUpdate


@pytest.fixture
def manager(db):
    """Create a SeriesManager with test database."""
    return SeriesManager(db)


@pytest.fixture
def order_manager(db, manager):
    """Create a ReadingOrderManager backed by SQLite."""
    return ReadingOrderManager(manager, SeriesBookSource(db))


class TestSeriesCRUD:
    """Tests for series CRUD operations."""

    def test_create_series(self, manager):
        """Test creating a series."""
        result = manager.create_series(SeriesCreate(
            name="The Lord of the Rings",
            author="J.R.R. Tolkien",
            book_ids=["a", "b", "c"],
        ))

        assert result.id is not None
        assert result.name == "The Lord of the Rings"
        assert result.author == "J.R.R. Tolkien"
        assert result.book_ids == ["a", "b", "c"]
        assert result.reading_order == ReadingOrderMode.PUBLICATION.value
        assert result.custom_order is None
        assert result.is_tracked is False
        assert result.created_at is not None

    def test_create_series_with_mode(self, manager):
        """Test creating a series with a non-default reading order."""
        result = manager.create_series(SeriesCreate(
            name="Discworld", reading_order=ReadingOrderMode.CHRONOLOGICAL,
        ))

        assert result.reading_order == "chronological"

    def test_get_series(self, manager):
        """Test getting a series by ID."""
        created = manager.create_series(SeriesCreate(name="Test Series"))

        result = manager.get_series(created.id)

        assert result is not None
        assert result.id == created.id
        assert result.name == "Test Series"

    def test_get_series_not_found(self, manager):
        """Test getting non-existent series."""
        assert manager.get_series("00000000-0000-0000-0000-000000000000") is None

    def test_update_series(self, manager):
        """Test updating series details."""
        created = manager.create_series(SeriesCreate(name="Original Name"))

        result = manager.update_series(
            created.id, SeriesUpdate(name="Updated Name", author="New Author")
        )

        assert result.name == "Updated Name"
        assert result.author == "New Author"

    def test_update_series_not_found(self, manager):
        """Test updating non-existent series."""
        assert manager.update_series("missing", SeriesUpdate(name="X")) is None

    def test_delete_series(self, manager):
        """Test deleting a series."""
        created = manager.create_series(SeriesCreate(name="To Delete"))

        assert manager.delete_series(created.id) is True
        assert manager.get_series(created.id) is None
        assert manager.delete_series(created.id) is False

    def test_list_series(self, manager):
        """Test listing series sorted by name, with search."""
        manager.create_series(SeriesCreate(name="Mistborn"))
        manager.create_series(SeriesCreate(name="Dune"))
        manager.create_series(SeriesCreate(name="Dune Chronicles Companion"))

        assert [s.name for s in manager.list_series()] == [
            "Dune", "Dune Chronicles Companion", "Mistborn",
        ]
        assert len(manager.list_series(search="dune")) == 2
        assert len(manager.list_series(limit=1)) == 1


class TestMembership:
    """Tests for series membership."""

    def test_add_book(self, manager):
        """Test appending books keeps insertion order."""
        series = manager.create_series(SeriesCreate(name="S"))

        manager.add_book(series.id, "b2")
        result = manager.add_book(series.id, "b1")

        assert result.book_ids == ["b2", "b1"]

    def test_add_book_twice_is_noop(self, manager):
        """Test adding an existing member does not duplicate it."""
        series = manager.create_series(SeriesCreate(name="S", book_ids=["b1"]))

        result = manager.add_book(series.id, "b1")

        assert result.book_ids == ["b1"]

    def test_add_book_not_found(self, manager):
        """Test adding to a missing series."""
        assert manager.add_book("missing", "b1") is None

    def test_remove_book_keeps_custom_order(self, manager):
        """Test removing a member leaves the custom order alone."""
        series = manager.create_series(SeriesCreate(name="S", book_ids=["b1", "b2"]))
        manager.set_reading_order(series.id, ReadingOrderMode.CUSTOM, ["b2", "b1"])

        result = manager.remove_book(series.id, "b1")

        assert result.book_ids == ["b2"]
        assert result.custom_order == ["b2", "b1"]

    def test_remove_book_not_found(self, manager):
        """Test removing from a missing series."""
        assert manager.remove_book("missing", "b1") is None

    def test_find_series_for_book(self, manager):
        """Test finding every series containing a book."""
        manager.create_series(SeriesCreate(name="One", book_ids=["shared", "x"]))
        manager.create_series(SeriesCreate(name="Two", book_ids=["shared"]))
        manager.create_series(SeriesCreate(name="Three", book_ids=["y"]))

        result = manager.find_series_for_book("shared")

        assert sorted(s.name for s in result) == ["One", "Two"]


class TestTracking:
    """Tests for series tracking."""

    def test_set_tracking(self, manager):
        """Test toggling tracking and listing tracked series."""
        tracked = manager.create_series(SeriesCreate(name="Tracked"))
        manager.create_series(SeriesCreate(name="Untracked"))

        result = manager.set_tracking(tracked.id, True)

        assert result.is_tracked is True
        assert [s.name for s in manager.list_tracked()] == ["Tracked"]

    def test_set_tracking_not_found(self, manager):
        """Test tracking a missing series."""
        assert manager.set_tracking("missing", True) is None


class TestSetReadingOrder:
    """Tests for the series store write operation."""

    def test_sets_mode_and_order_together(self, manager):
        """Test mode and custom order are persisted as a unit."""
        series = manager.create_series(SeriesCreate(name="S", book_ids=["a", "b"]))

        result = manager.set_reading_order(series.id, ReadingOrderMode.CUSTOM, ["b", "a"])
        reread = manager.get_series(series.id)

        assert result.reading_order == reread.reading_order == "custom"
        assert result.custom_order == reread.custom_order == ["b", "a"]

    def test_distinguishes_empty_from_missing(self, manager):
        """Test an empty list and None are stored distinctly."""
        series = manager.create_series(SeriesCreate(name="S"))

        manager.set_reading_order(series.id, ReadingOrderMode.CUSTOM, [])
        assert manager.get_series(series.id).custom_order == []

        manager.set_reading_order(series.id, ReadingOrderMode.PUBLICATION, None)
        assert manager.get_series(series.id).custom_order is None

    def test_not_found(self, manager):
        """Test writing to a missing series."""
        assert manager.set_reading_order("missing", ReadingOrderMode.CUSTOM, ["a"]) is None

    def test_failed_write_leaves_series_unchanged(self, db, manager, monkeypatch):
        """Test a storage error rolls back and propagates."""
        series = manager.create_series(SeriesCreate(name="S", book_ids=["a", "b"]))

        def broken_set_custom_order(self, custom_order):
            raise OperationalError("UPDATE series", {}, Exception("database is locked"))

        monkeypatch.setattr(Series, "set_custom_order", broken_set_custom_order)

        with pytest.raises(OperationalError):
            manager.set_reading_order(series.id, ReadingOrderMode.CUSTOM, ["b", "a"])

        monkeypatch.undo()
        reread = manager.get_series(series.id)
        assert reread.reading_order == "publication"
        assert reread.custom_order is None

    def test_unknown_stored_mode_is_readable(self, db, manager):
        """Test a mode written by a newer version round-trips as a string."""
        series = manager.create_series(SeriesCreate(name="S"))
        with db.get_session() as session:
            session.get(Series, series.id).reading_order = "by-color"

        assert manager.get_series(series.id).reading_order == "by-color"


class TestReadingOrderIntegration:
    """End-to-end reading order over SQLite."""

    def test_publication_then_reorder(self, manager, order_manager, trilogy):
        """Test [B, A, C] by date, then moving A to the front gives [A, B, C]."""
        a, b, c = trilogy
        series = manager.create_series(SeriesCreate(name="S1", book_ids=[a.id, b.id, c.id]))

        ordered = order_manager.get_ordered_series(series.id)
        assert [book.title for book in ordered.books] == ["B", "A", "C"]

        order_manager.reorder_book(series.id, a.id, 0)
        ordered = order_manager.get_ordered_series(series.id)

        assert ordered.series.reading_order == "custom"
        assert [book.title for book in ordered.books] == ["A", "B", "C"]

    def test_mode_switch_preserves_custom_order(self, manager, order_manager, trilogy):
        """Test custom -> publication -> custom restores the saved order."""
        ids = [book.id for book in trilogy]
        series = manager.create_series(SeriesCreate(name="S1", book_ids=ids))
        order_manager.update_custom_order(series.id, ids[::-1])

        order_manager.change_mode(series.id, ReadingOrderMode.PUBLICATION)
        result = order_manager.change_mode(series.id, ReadingOrderMode.CUSTOM)

        assert result.custom_order == ids[::-1]

    def test_removed_book_is_skipped(self, db, manager, order_manager, trilogy):
        """Test a deleted book in the custom order is ignored."""
        a, b, c = trilogy
        series = manager.create_series(SeriesCreate(name="S1", book_ids=[a.id, b.id, c.id]))
        order_manager.update_custom_order(series.id, [c.id, a.id, b.id])

        db.delete_book(a.id)
        ordered = order_manager.get_ordered_series(series.id)

        assert [book.title for book in ordered.books] == ["C", "B"]

    def test_not_found_writes_nothing(self, db, order_manager):
        """Test mutating a missing series leaves the table empty."""
        assert order_manager.reorder_book("missing", "a", 0) is None
        assert order_manager.change_mode("missing", "custom") is None
        assert order_manager.update_custom_order("missing", ["a"]) is None

        with db.get_session() as session:
            assert session.query(Series).count() == 0
