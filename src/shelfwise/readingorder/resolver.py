"""Pick and run the ordering strategy configured for a series."""

import logging
from typing import Iterable

from .schemas import BookRecord, ReadingOrderMode, SeriesRecord
from .strategies import chronological_order, custom_order, publication_order

logger = logging.getLogger(__name__)


def resolve_order(series: SeriesRecord, books: Iterable[BookRecord]) -> list[BookRecord]:
    """Order a series' books according to its reading order mode.

    Unknown modes fall back to publication order.

    Args:
        series: Series whose mode and custom order drive the result
        books: Current books of the series

    Returns:
        New list of the books in reading order
    """
    mode = series.reading_order

    if mode == ReadingOrderMode.CHRONOLOGICAL.value:
        return chronological_order(books)

    if mode == ReadingOrderMode.CUSTOM.value:
        return custom_order(books, series.custom_order)

    if mode != ReadingOrderMode.PUBLICATION.value:
        logger.debug(
            "Series %s has unknown reading order %r, using publication order",
            series.id,
            mode,
        )
    return publication_order(books)
