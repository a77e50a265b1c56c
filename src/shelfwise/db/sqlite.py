"""SQLite database operations.

Handles database connection, session management, and book CRUD operations.
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Iterable, Optional

from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base, Book
from .schemas import BookCreate, BookUpdate

logger = logging.getLogger(__name__)


class Database:
    """Database connection and operations manager."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. If None, uses
                     SHELFWISE_DB_PATH env var or default location.
        """
        if db_path is None:
            db_path = os.environ.get(
                "SHELFWISE_DB_PATH",
                str(Path.home() / ".shelfwise" / "shelfwise.db"),
            )

        self.db_path = Path(db_path)
        self._is_memory = str(db_path) == ":memory:"

        if not self._is_memory:
            self._ensure_directory()

        # For in-memory databases, use StaticPool to reuse the same connection
        # This ensures all sessions share the same in-memory database
        if self._is_memory:
            self.engine = create_engine(
                "sqlite:///:memory:",
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                connect_args={"check_same_thread": False},
            )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def _ensure_directory(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def create_tables(self) -> None:
        """Create all database tables."""
        # Import series models to register them with Base
        from ..series.models import Series  # noqa: F401
        # Import settings models to register them with Base
        from ..settings.models import Setting  # noqa: F401

        Base.metadata.create_all(self.engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session context manager.

        Commits on success; rolls back and re-raises on any error so a
        failed write never leaves a partial update behind.
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ========================================================================
    # Book Operations
    # ========================================================================

    def create_book(self, book: BookCreate, session: Optional[Session] = None) -> Book:
        """Create a new book record."""

        def _create(s: Session) -> Book:
            db_book = Book(
                title=book.title,
                author=book.author,
                description=book.description,
                publication_date=(
                    book.publication_date.isoformat() if book.publication_date else None
                ),
                chronological_position=book.chronological_position,
            )
            s.add(db_book)
            s.flush()
            return db_book

        if session:
            return _create(session)
        else:
            with self.get_session() as s:
                db_book = _create(s)
                s.refresh(db_book)
                s.expunge(db_book)
                logger.info("Created book %s (%s)", db_book.id, db_book.title)
                return db_book

    def get_book(self, book_id: str, session: Optional[Session] = None) -> Optional[Book]:
        """Get a book by ID."""

        def _get(s: Session) -> Optional[Book]:
            return s.get(Book, book_id)

        if session:
            return _get(session)
        else:
            with self.get_session() as s:
                book = _get(s)
                if book:
                    s.expunge(book)
                return book

    def get_books_by_ids(
        self, book_ids: Iterable[str], session: Optional[Session] = None
    ) -> dict[str, Book]:
        """Get books keyed by ID. Unknown IDs are absent from the result."""
        ids = list(book_ids)

        def _get(s: Session) -> dict[str, Book]:
            if not ids:
                return {}
            stmt = select(Book).where(Book.id.in_(ids))
            return {book.id: book for book in s.execute(stmt).scalars().all()}

        if session:
            return _get(session)
        else:
            with self.get_session() as s:
                books = _get(s)
                for book in books.values():
                    s.expunge(book)
                return books

    def get_all_books(self, session: Optional[Session] = None) -> list[Book]:
        """Get all books."""

        def _get_all(s: Session) -> list[Book]:
            stmt = select(Book).order_by(Book.title)
            return list(s.execute(stmt).scalars().all())

        if session:
            return _get_all(session)
        else:
            with self.get_session() as s:
                books = _get_all(s)
                for book in books:
                    s.expunge(book)
                return books

    def update_book(
        self, book_id: str, updates: BookUpdate, session: Optional[Session] = None
    ) -> Optional[Book]:
        """Update a book record."""

        def _update(s: Session) -> Optional[Book]:
            db_book = s.get(Book, book_id)
            if not db_book:
                return None

            update_data = updates.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if field == "publication_date":
                    value = value.isoformat() if value else None
                setattr(db_book, field, value)

            s.flush()
            return db_book

        if session:
            return _update(session)
        else:
            with self.get_session() as s:
                db_book = _update(s)
                if db_book:
                    s.refresh(db_book)
                    s.expunge(db_book)
                return db_book

    def delete_book(self, book_id: str, session: Optional[Session] = None) -> bool:
        """Delete a book record.

        Series that list the book keep the stale ID; ordering ignores it.
        """

        def _delete(s: Session) -> bool:
            book = s.get(Book, book_id)
            if not book:
                return False
            s.delete(book)
            return True

        if session:
            return _delete(session)
        else:
            with self.get_session() as s:
                return _delete(s)


# Global database instance
_db: Optional[Database] = None


def get_db(db_path: Optional[str] = None) -> Database:
    """Get or create the global database instance."""
    global _db
    if _db is None:
        _db = Database(db_path)
        _db.create_tables()
    return _db


def reset_db() -> None:
    """Reset the global database instance. Used for testing."""
    global _db
    _db = None
