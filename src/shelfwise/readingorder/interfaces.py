"""Collaborators the reading order engine depends on.

Implementations are passed to ``ReadingOrderManager`` explicitly, which
keeps the engine free of process-wide state and lets tests use fakes.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .schemas import BookRecord, ReadingOrderMode, SeriesRecord


class SeriesStore(ABC):
    """Persists series records, including their reading order."""

    @abstractmethod
    def get_series(self, series_id: str) -> Optional[SeriesRecord]:
        """Return the series, or None if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def set_reading_order(
        self,
        series_id: str,
        mode: ReadingOrderMode,
        custom_order: Optional[Sequence[str]],
    ) -> Optional[SeriesRecord]:
        """Persist mode and custom order together, all or nothing.

        Returns the updated series, or None if it does not exist.
        """
        raise NotImplementedError


class BookSource(ABC):
    """Supplies the current books of a series."""

    @abstractmethod
    def get_books(self, series_id: str) -> list[BookRecord]:
        """Return the books belonging to the series."""
        raise NotImplementedError
