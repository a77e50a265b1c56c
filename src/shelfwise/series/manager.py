"""Manager for book series operations."""

import logging
from typing import Optional, Sequence

from sqlalchemy import asc
from sqlalchemy.orm import Session

from ..db.sqlite import Database
from ..readingorder.interfaces import SeriesStore
from ..readingorder.schemas import ReadingOrderMode, SeriesRecord
from .models import Series
from .schemas import SeriesCreate, SeriesUpdate

logger = logging.getLogger(__name__)


class SeriesManager(SeriesStore):
    """SQLite-backed series store."""

    def __init__(self, db: Database):
        """Initialize the series manager.

        Args:
            db: Database instance
        """
        self.db = db

    # ========================================================================
    # Series CRUD
    # ========================================================================

    def create_series(self, series: SeriesCreate) -> SeriesRecord:
        """Create a new series.

        Args:
            series: Series data to create

        Returns:
            Created series
        """
        with self.db.get_session() as session:
            db_series = Series(
                name=series.name,
                author=series.author,
                description=series.description,
                reading_order=series.reading_order.value,
                is_tracked=series.is_tracked,
            )
            db_series.set_book_ids(series.book_ids)

            session.add(db_series)
            session.flush()

            logger.info("Created series %s (%s)", db_series.id, db_series.name)
            return self._to_record(db_series)

    def get_series(self, series_id: str) -> Optional[SeriesRecord]:
        """Get a series by ID.

        Args:
            series_id: Series ID

        Returns:
            Series or None if not found
        """
        with self.db.get_session() as session:
            series = self._get(session, series_id)
            if not series:
                return None

            return self._to_record(series)

    def update_series(
        self, series_id: str, updates: SeriesUpdate
    ) -> Optional[SeriesRecord]:
        """Update series details.

        Args:
            series_id: Series ID
            updates: Fields to update

        Returns:
            Updated series or None if not found
        """
        with self.db.get_session() as session:
            series = self._get(session, series_id)
            if not series:
                return None

            update_data = updates.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                setattr(series, field, value)

            session.flush()

            return self._to_record(series)

    def delete_series(self, series_id: str) -> bool:
        """Delete a series.

        Args:
            series_id: Series ID

        Returns:
            True if deleted, False if not found
        """
        with self.db.get_session() as session:
            series = self._get(session, series_id)
            if not series:
                return False

            session.delete(series)
            logger.info("Deleted series %s", series_id)
            return True

    def list_series(
        self,
        search: Optional[str] = None,
        is_tracked: Optional[bool] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[SeriesRecord]:
        """List series with optional filters.

        Args:
            search: Search in name
            is_tracked: Filter by tracking status
            limit: Max items to return
            offset: Number of items to skip

        Returns:
            List of series ordered by name
        """
        with self.db.get_session() as session:
            query = session.query(Series)

            if search:
                query = query.filter(Series.name.ilike(f"%{search}%"))

            if is_tracked is not None:
                query = query.filter(Series.is_tracked == is_tracked)

            query = query.order_by(asc(Series.name))
            series_list = query.offset(offset).limit(limit).all()

            return [self._to_record(s) for s in series_list]

    # ========================================================================
    # Membership
    # ========================================================================

    def add_book(self, series_id: str, book_id: str) -> Optional[SeriesRecord]:
        """Append a book to the series membership.

        Adding a book that is already a member is a no-op.

        Args:
            series_id: Series ID
            book_id: Book ID

        Returns:
            Updated series or None if not found
        """
        with self.db.get_session() as session:
            series = self._get(session, series_id)
            if not series:
                return None

            book_ids = series.get_book_ids()
            if book_id not in book_ids:
                book_ids.append(book_id)
                series.set_book_ids(book_ids)
                session.flush()

            return self._to_record(series)

    def remove_book(self, series_id: str, book_id: str) -> Optional[SeriesRecord]:
        """Remove a book from the series membership.

        The custom order is left as is; the stale ID is ignored when the
        series is ordered.

        Args:
            series_id: Series ID
            book_id: Book ID

        Returns:
            Updated series or None if not found
        """
        with self.db.get_session() as session:
            series = self._get(session, series_id)
            if not series:
                return None

            series.set_book_ids([b for b in series.get_book_ids() if b != book_id])
            session.flush()

            return self._to_record(series)

    def find_series_for_book(self, book_id: str) -> list[SeriesRecord]:
        """Find all series a book belongs to.

        Args:
            book_id: Book ID

        Returns:
            List of series containing the book
        """
        with self.db.get_session() as session:
            series_list = session.query(Series).order_by(asc(Series.name)).all()

            return [
                self._to_record(s) for s in series_list
                if book_id in s.get_book_ids()
            ]

    # ========================================================================
    # Tracking
    # ========================================================================

    def set_tracking(self, series_id: str, is_tracked: bool) -> Optional[SeriesRecord]:
        """Set whether the user tracks a series for new releases."""
        return self.update_series(series_id, SeriesUpdate(is_tracked=is_tracked))

    def list_tracked(self) -> list[SeriesRecord]:
        """Get all tracked series."""
        return self.list_series(is_tracked=True, limit=1000)

    # ========================================================================
    # Reading Order
    # ========================================================================

    def set_reading_order(
        self,
        series_id: str,
        mode: ReadingOrderMode,
        custom_order: Optional[Sequence[str]],
    ) -> Optional[SeriesRecord]:
        """Persist reading order mode and custom order in one transaction.

        Args:
            series_id: Series ID
            mode: Reading order mode
            custom_order: Book IDs in custom order, or None

        Returns:
            Updated series or None if not found
        """
        with self.db.get_session() as session:
            series = self._get(session, series_id)
            if not series:
                return None

            series.reading_order = ReadingOrderMode(mode).value
            series.set_custom_order(list(custom_order) if custom_order is not None else None)
            session.flush()

            return self._to_record(series)

    # ========================================================================
    # Helper Methods
    # ========================================================================

    def _get(self, session: Session, series_id: str) -> Optional[Series]:
        """Load a series row by ID."""
        return session.query(Series).filter(Series.id == str(series_id)).first()

    def _to_record(self, series: Series) -> SeriesRecord:
        """Convert a series row to a SeriesRecord."""
        return SeriesRecord(
            id=series.id,
            name=series.name,
            author=series.author,
            description=series.description,
            book_ids=series.get_book_ids(),
            reading_order=series.reading_order,
            custom_order=series.get_custom_order(),
            is_tracked=series.is_tracked,
            created_at=series.created_at,
            updated_at=series.updated_at,
        )
