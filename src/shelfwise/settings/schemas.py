"""Schemas for user settings and preferences."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..readingorder.schemas import ReadingOrderMode


class SettingKey(str, Enum):
    """Known setting keys."""

    DEFAULT_READING_ORDER = "default_reading_order"
    ITEMS_PER_PAGE = "items_per_page"
    SHOW_PUBLICATION_DATES = "show_publication_dates"


class ReadingSettings(BaseModel):
    """All known settings with their typed values."""

    default_reading_order: ReadingOrderMode = ReadingOrderMode.PUBLICATION
    items_per_page: int = Field(default=20, ge=5, le=100)
    show_publication_dates: bool = True


class SettingResponse(BaseModel):
    """Response for a single known setting."""

    key: SettingKey
    value: Any
    default_value: Any
    value_type: str  # bool, int, enum
    description: Optional[str] = None
