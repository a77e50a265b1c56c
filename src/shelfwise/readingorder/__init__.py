"""Series reading order resolution and custom ordering."""

from .interfaces import BookSource, SeriesStore
from .manager import ReadingOrderManager
from .resolver import resolve_order
from .schemas import BookRecord, OrderedSeries, ReadingOrderMode, SeriesRecord
from .strategies import (
    CHRONOLOGICAL_RULES,
    PUBLICATION_RULES,
    chain_comparators,
    chronological_order,
    compare_chronological_position,
    compare_publication_date,
    compare_title,
    custom_order,
    publication_order,
)

__all__ = [
    "BookSource",
    "SeriesStore",
    "ReadingOrderManager",
    "resolve_order",
    "BookRecord",
    "OrderedSeries",
    "ReadingOrderMode",
    "SeriesRecord",
    "CHRONOLOGICAL_RULES",
    "PUBLICATION_RULES",
    "chain_comparators",
    "chronological_order",
    "compare_chronological_position",
    "compare_publication_date",
    "compare_title",
    "custom_order",
    "publication_order",
]
