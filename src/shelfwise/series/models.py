"""SQLAlchemy models for book series.

Tables:
- series: Series information, membership and reading order
"""

import json
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..db.models import Base, generate_uuid


class Series(Base):
    """Book series model."""

    __tablename__ = "series"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)

    # Series information
    name: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    author: Mapped[Optional[str]] = mapped_column(String(300))
    description: Mapped[Optional[str]] = mapped_column(Text)

    # Membership, in insertion order
    book_ids: Mapped[str] = mapped_column(Text, default="[]")  # JSON array

    # Reading order
    reading_order: Mapped[str] = mapped_column(
        String(20), default="publication"
    )  # publication, chronological, custom
    custom_order: Mapped[Optional[str]] = mapped_column(Text)  # JSON array

    # Notifications
    is_tracked: Mapped[bool] = mapped_column(Boolean, default=False, index=True)

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
        return f"<Series(id={self.id}, name='{self.name}', reading_order='{self.reading_order}')>"

    # Helper methods for JSON fields
    def get_book_ids(self) -> list[str]:
        """Get member book IDs as list."""
        if self.book_ids:
            return json.loads(self.book_ids)
        return []

    def set_book_ids(self, book_ids: list[str]) -> None:
        """Set member book IDs from list."""
        self.book_ids = json.dumps(list(book_ids))

    def get_custom_order(self) -> Optional[list[str]]:
        """Get custom order as list, None if never saved."""
        if self.custom_order is None:
            return None
        return json.loads(self.custom_order)

    def set_custom_order(self, custom_order: Optional[list[str]]) -> None:
        """Set custom order from list. None clears it."""
        self.custom_order = json.dumps(list(custom_order)) if custom_order is not None else None
