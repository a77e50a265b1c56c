"""Database module for local SQLite storage."""

from .models import Book
from .schemas import BookCreate, BookUpdate, BookResponse
from .sqlite import Database, get_db

__all__ = [
    "Book",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "Database",
    "get_db",
]
