"""SQLAlchemy ORM models for local SQLite database.

Tables:
- books: Book records used as the book source for series ordering
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlalchemy import Float, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def generate_uuid() -> str:
    """Generate a UUID string for primary keys."""
    return str(uuid4())


class Book(Base):
    """Book model - the fields series ordering reads, plus display data."""

    __tablename__ = "books"

    # Primary key
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)

    # Core fields
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    author: Mapped[Optional[str]] = mapped_column(String(500), index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)

    # Ordering keys
    publication_date: Mapped[Optional[str]] = mapped_column(String(26))  # ISO datetime
    chronological_position: Mapped[Optional[float]] = mapped_column(Float)

    # Timestamps
    created_at: Mapped[str] = mapped_column(
        String(26), default=lambda: datetime.now(timezone.utc).isoformat()
    )
    updated_at: Mapped[str] = mapped_column(
        String(26),
        default=lambda: datetime.now(timezone.utc).isoformat(),
        onupdate=lambda: datetime.now(timezone.utc).isoformat(),
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}')>"

    def get_publication_date(self) -> Optional[datetime]:
        """Get publication date as datetime."""
        if self.publication_date:
            return datetime.fromisoformat(self.publication_date)
        return None

    def set_publication_date(self, value: Optional[datetime]) -> None:
        """Set publication date from a datetime."""
        self.publication_date = value.isoformat() if value else None
