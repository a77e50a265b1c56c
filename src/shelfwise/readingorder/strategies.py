"""Ordering strategies for the books of a series.

Each comparison rule is an ordered tuple of tie-break functions. A tie-break
returns a negative number, zero or a positive number like a classic ``cmp``;
zero means "equal or indeterminate" and hands the pair to the next rule.
All strategies return a new list and rely on ``sorted`` being stable, so
books that compare equal under every rule keep their input order.
"""

import math
from functools import cmp_to_key
from typing import Callable, Iterable, Optional, Sequence

from .schemas import BookRecord

Comparator = Callable[[BookRecord, BookRecord], int]


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_publication_date(a: BookRecord, b: BookRecord) -> int:
    """Earlier publication first; indeterminate unless both books have a date."""
    if a.publication_date is None or b.publication_date is None:
        return 0
    return _cmp(a.publication_date, b.publication_date)


def compare_chronological_position(a: BookRecord, b: BookRecord) -> int:
    """Earlier in-story position first; indeterminate unless both have one."""
    if a.chronological_position is None or b.chronological_position is None:
        return 0
    return _cmp(a.chronological_position, b.chronological_position)


def compare_title(a: BookRecord, b: BookRecord) -> int:
    """Lexical title comparison."""
    return _cmp(a.title, b.title)


PUBLICATION_RULES: tuple[Comparator, ...] = (
    compare_publication_date,
    compare_title,
)

CHRONOLOGICAL_RULES: tuple[Comparator, ...] = (
    compare_chronological_position,
    compare_publication_date,
    compare_title,
)


def chain_comparators(rules: Sequence[Comparator]) -> Comparator:
    """Combine tie-break functions, first non-zero result wins."""

    def compare(a: BookRecord, b: BookRecord) -> int:
        for rule in rules:
            result = rule(a, b)
            if result:
                return result
        return 0

    return compare


def sort_with_rules(
    books: Iterable[BookRecord], rules: Sequence[Comparator]
) -> list[BookRecord]:
    """Stable sort of books by an ordered list of tie-break rules."""
    return sorted(books, key=cmp_to_key(chain_comparators(rules)))


def publication_order(books: Iterable[BookRecord]) -> list[BookRecord]:
    """Books by publication date, falling back to title."""
    return sort_with_rules(books, PUBLICATION_RULES)


def chronological_order(books: Iterable[BookRecord]) -> list[BookRecord]:
    """Books by in-story position, then publication date, then title."""
    return sort_with_rules(books, CHRONOLOGICAL_RULES)


def custom_order(
    books: Iterable[BookRecord], order: Optional[Sequence[str]]
) -> list[BookRecord]:
    """Books in the order of an explicit list of book IDs.

    IDs in ``order`` that match no book are ignored. Books missing from
    ``order`` follow every listed book, in their input order. An empty or
    missing ``order`` means publication order.

    Args:
        books: Books of the series
        order: Book IDs in the desired order

    Returns:
        New list of the same books, reordered
    """
    if not order:
        return publication_order(books)

    ranks: dict[str, int] = {}
    for index, book_id in enumerate(order):
        ranks.setdefault(book_id, index)

    return sorted(books, key=lambda book: ranks.get(book.id, math.inf))
