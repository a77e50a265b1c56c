"""Pydantic schemas for book series management."""

from typing import Optional

from pydantic import BaseModel, Field

from ..readingorder.schemas import ReadingOrderMode


class SeriesCreate(BaseModel):
    """Schema for creating a series."""

    name: str = Field(..., min_length=1, max_length=500)
    author: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = None
    book_ids: list[str] = Field(default_factory=list)
    reading_order: ReadingOrderMode = ReadingOrderMode.PUBLICATION
    is_tracked: bool = False


class SeriesUpdate(BaseModel):
    """Schema for updating series details.

    Reading order is changed through ReadingOrderManager instead.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=500)
    author: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = None
    is_tracked: Optional[bool] = None
