"""Pydantic schemas for book data validation."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class BookBase(BaseModel):
    """Base book fields."""

    title: str = Field(..., min_length=1, max_length=500)
    author: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    publication_date: Optional[date] = None
    chronological_position: Optional[float] = Field(
        None, description="Position on the in-story timeline"
    )

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        """Reject whitespace-only titles."""
        if not v.strip():
            raise ValueError("Title cannot be blank")
        return v


class BookCreate(BookBase):
    """Schema for creating a book."""

    pass


class BookUpdate(BaseModel):
    """Schema for updating a book. All fields optional."""

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    author: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    publication_date: Optional[date] = None
    chronological_position: Optional[float] = None


class BookResponse(BaseModel):
    """Schema for book responses (includes DB-generated fields)."""

    id: UUID
    title: str
    author: Optional[str] = None
    description: Optional[str] = None
    publication_date: Optional[date] = None
    chronological_position: Optional[float] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
