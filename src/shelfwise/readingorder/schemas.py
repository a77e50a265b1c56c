"""Pydantic schemas for series reading order."""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class ReadingOrderMode(str, Enum):
    """Strategy used to order the books of a series."""

    PUBLICATION = "publication"
    CHRONOLOGICAL = "chronological"
    CUSTOM = "custom"


class BookRecord(BaseModel):
    """The fields of a book that ordering compares."""

    id: str
    title: str
    publication_date: Optional[datetime] = None
    chronological_position: Optional[float] = None

    @field_validator("publication_date", mode="before")
    @classmethod
    def normalize_publication_date(cls, v: Any) -> Any:
        """Make every publication date comparable with every other.

        Plain dates become midnight datetimes and aware datetimes are
        converted to naive UTC.
        """
        if isinstance(v, datetime):
            if v.tzinfo is not None:
                return v.astimezone(timezone.utc).replace(tzinfo=None)
            return v
        if isinstance(v, date):
            return datetime(v.year, v.month, v.day)
        return v

    @field_validator("publication_date", mode="after")
    @classmethod
    def strip_parsed_timezone(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Normalize aware datetimes parsed from strings."""
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class SeriesRecord(BaseModel):
    """A series as seen by the reading order engine."""

    id: str
    name: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None
    book_ids: list[str] = Field(default_factory=list)
    # Kept as a plain string so unknown modes survive a round trip
    reading_order: str = ReadingOrderMode.PUBLICATION.value
    custom_order: Optional[list[str]] = None
    is_tracked: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("reading_order", mode="before")
    @classmethod
    def mode_to_value(cls, v: Any) -> Any:
        """Accept enum members as well as raw strings."""
        if isinstance(v, ReadingOrderMode):
            return v.value
        return v

    @property
    def has_custom_order(self) -> bool:
        """Whether a non-empty custom order has been saved."""
        return bool(self.custom_order)


class OrderedSeries(BaseModel):
    """A series together with its books in resolved reading order."""

    series: SeriesRecord
    books: list[BookRecord]
