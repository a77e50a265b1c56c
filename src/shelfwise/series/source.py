"""Book source backed by the local books table."""

import logging

from ..db.models import Book
from ..db.sqlite import Database
from ..readingorder.interfaces import BookSource
from ..readingorder.schemas import BookRecord
from .models import Series

logger = logging.getLogger(__name__)


class SeriesBookSource(BookSource):
    """Loads the member books of a series from SQLite."""

    def __init__(self, db: Database):
        self.db = db

    def get_books(self, series_id: str) -> list[BookRecord]:
        """Member books of a series, in membership order.

        Member IDs with no book row are skipped. An unknown series has no
        books.
        """
        with self.db.get_session() as session:
            series = session.get(Series, str(series_id))
            if not series:
                return []

            book_ids = series.get_book_ids()
            books = self.db.get_books_by_ids(book_ids, session=session)

            missing = [book_id for book_id in book_ids if book_id not in books]
            if missing:
                logger.debug(
                    "Series %s lists %d book(s) not in the library: %s",
                    series_id,
                    len(missing),
                    ", ".join(missing),
                )

            return [
                self._to_record(books[book_id])
                for book_id in book_ids
                if book_id in books
            ]

    @staticmethod
    def _to_record(book: Book) -> BookRecord:
        return BookRecord(
            id=book.id,
            title=book.title,
            publication_date=book.get_publication_date(),
            chronological_position=book.chronological_position,
        )
