"""Book series management module."""

from .manager import SeriesManager
from .models import Series
from .schemas import SeriesCreate, SeriesUpdate
from .source import SeriesBookSource

__all__ = [
    "SeriesManager",
    "Series",
    "SeriesCreate",
    "SeriesUpdate",
    "SeriesBookSource",
]
