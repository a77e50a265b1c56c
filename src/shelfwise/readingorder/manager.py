"""Manager for series reading order and custom ordering."""

import logging
from typing import Iterable, Optional, Sequence, Union

from .interfaces import BookSource, SeriesStore
from .resolver import resolve_order
from .schemas import BookRecord, OrderedSeries, ReadingOrderMode, SeriesRecord

logger = logging.getLogger(__name__)


class ReadingOrderManager:
    """Reads and changes the reading order of series.

    Every mutating operation re-reads the series from the store before
    writing. Nothing is locked between the read and the write, so two
    concurrent reorders of the same series are last-writer-wins.
    """

    def __init__(self, store: SeriesStore, book_source: Optional[BookSource] = None):
        """Initialize the reading order manager.

        Args:
            store: Series store to read from and write to
            book_source: Book source, needed only by get_ordered_series
        """
        self.store = store
        self.book_source = book_source

    # ========================================================================
    # Ordering
    # ========================================================================

    def get_ordered_books(
        self, series: SeriesRecord, books: Iterable[BookRecord]
    ) -> list[BookRecord]:
        """Order books using the series' current mode. No store access."""
        return resolve_order(series, books)

    def get_ordered_series(self, series_id: str) -> Optional[OrderedSeries]:
        """Load a series and its books and return them in reading order.

        Args:
            series_id: Series ID

        Returns:
            Series with ordered books, or None if the series is not found
        """
        if self.book_source is None:
            raise RuntimeError("ReadingOrderManager was created without a book source")

        series = self.store.get_series(series_id)
        if series is None:
            logger.debug("Series %s not found", series_id)
            return None

        books = self.book_source.get_books(series_id)
        return OrderedSeries(series=series, books=resolve_order(series, books))

    # ========================================================================
    # Mutations
    # ========================================================================

    def update_custom_order(
        self, series_id: str, book_ids: Sequence[str]
    ) -> Optional[SeriesRecord]:
        """Save an explicit custom order and switch the series to it.

        Args:
            series_id: Series ID
            book_ids: Book IDs in the desired order, stored as given

        Returns:
            Updated series or None if not found
        """
        series = self.store.get_series(series_id)
        if series is None:
            logger.debug("Series %s not found, custom order not saved", series_id)
            return None

        logger.info("Saving custom order of %d books for series %s", len(book_ids), series_id)
        return self.store.set_reading_order(series_id, ReadingOrderMode.CUSTOM, list(book_ids))

    def change_mode(
        self, series_id: str, mode: Union[ReadingOrderMode, str]
    ) -> Optional[SeriesRecord]:
        """Switch the reading order mode of a series.

        The first switch to custom mode seeds the custom order from the
        series membership. Any other switch keeps the saved custom order,
        so leaving custom mode and coming back restores it.

        Args:
            series_id: Series ID
            mode: New reading order mode

        Returns:
            Updated series or None if not found

        Raises:
            ValueError: If mode is not a known reading order mode
        """
        mode = ReadingOrderMode(mode)

        series = self.store.get_series(series_id)
        if series is None:
            logger.debug("Series %s not found, mode not changed", series_id)
            return None

        if mode == ReadingOrderMode.CUSTOM and not series.has_custom_order:
            logger.info(
                "Seeding custom order for series %s from %d member books",
                series_id,
                len(series.book_ids),
            )
            return self.store.set_reading_order(series_id, mode, list(series.book_ids))

        logger.info("Changing reading order of series %s to %s", series_id, mode.value)
        return self.store.set_reading_order(series_id, mode, series.custom_order)

    def reorder_book(
        self, series_id: str, book_id: str, new_index: int
    ) -> Optional[SeriesRecord]:
        """Move one book to a new position in the custom order.

        Starts from the saved custom order, or from the membership list if
        none is saved. The index is clamped: negative values move the book
        to the front, values past the end move it to the back.

        Args:
            series_id: Series ID
            book_id: Book to move
            new_index: Target position

        Returns:
            Updated series or None if not found

        Raises:
            TypeError: If new_index is not an integer
        """
        if isinstance(new_index, bool) or not isinstance(new_index, int):
            raise TypeError(f"new_index must be an int, got {type(new_index).__name__}")

        series = self.store.get_series(series_id)
        if series is None:
            logger.debug("Series %s not found, book %s not moved", series_id, book_id)
            return None

        working = list(series.custom_order) if series.has_custom_order else list(series.book_ids)
        working = [existing for existing in working if existing != book_id]

        position = max(0, min(new_index, len(working)))
        working.insert(position, book_id)

        logger.info("Moving book %s to position %d in series %s", book_id, position, series_id)
        return self.store.set_reading_order(series_id, ReadingOrderMode.CUSTOM, working)
