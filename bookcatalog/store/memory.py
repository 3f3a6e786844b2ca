"""
In-Memory Catalog Store

Keeps authors, books and users in process memory behind a lock.

Used by the test suite and by STORE_BACKEND=memory for local demos.
It enforces the same constraints as the SQL schema so both stores behave
identically from the service layer's point of view.
"""

import logging
import threading
from dataclasses import dataclass, field
from itertools import count

from bookcatalog.models import (
    MAX_AUTHOR_NAME_LENGTH,
    MAX_GENRE_LENGTH,
    MAX_TITLE_LENGTH,
    MIN_AUTHOR_NAME_LENGTH,
    MIN_TITLE_LENGTH,
    MIN_USERNAME_LENGTH,
)
from bookcatalog.schemas import AuthorRead, BookRead, UserInDB
from bookcatalog.store.base import CatalogStore, IntegrityViolation, StoreError

logger = logging.getLogger(__name__)


@dataclass
class _BookRow:
    """A stored book; the author is kept as a reference, like a foreign key."""

    id: int
    title: str
    published: int
    author_id: int
    genres: list[str] = field(default_factory=list)


class MemoryCatalogStore(CatalogStore):
    """
    Thread-safe in-memory implementation of CatalogStore.

    Dicts preserve insertion order, which gives the same listing order as
    the SQL store's ORDER BY id.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._authors: dict[int, AuthorRead] = {}
        self._books: dict[int, _BookRow] = {}
        self._users: dict[int, UserInDB] = {}
        self._author_ids = count(1)
        self._book_ids = count(1)
        self._user_ids = count(1)

    def clear(self) -> None:
        """Drop all data."""
        with self._lock:
            self._authors.clear()
            self._books.clear()
            self._users.clear()

    # -------------------------------------------------------------------------
    # Counts
    # -------------------------------------------------------------------------
    def count_books(self) -> int:
        with self._lock:
            return len(self._books)

    def count_authors(self) -> int:
        with self._lock:
            return len(self._authors)

    def count_books_by_author(self, author_id: int) -> int:
        with self._lock:
            return sum(1 for row in self._books.values() if row.author_id == author_id)

    # -------------------------------------------------------------------------
    # Authors
    # -------------------------------------------------------------------------
    def find_author_by_name(self, name: str) -> AuthorRead | None:
        with self._lock:
            return self._find_author_by_name(name)

    def get_author(self, author_id: int) -> AuthorRead | None:
        with self._lock:
            return self._authors.get(author_id)

    def list_authors(self) -> list[AuthorRead]:
        with self._lock:
            return list(self._authors.values())

    def create_author(self, name: str, born: int | None = None) -> AuthorRead:
        with self._lock:
            return self._insert_author(name, born)

    def get_or_create_author(self, name: str) -> AuthorRead:
        with self._lock:
            existing = self._find_author_by_name(name)
            if existing is not None:
                return existing
            return self._insert_author(name, None)

    def set_author_born(self, author_id: int, born: int) -> AuthorRead:
        with self._lock:
            author = self._authors.get(author_id)
            if author is None:
                raise StoreError(f"Author with ID {author_id} not found")
            updated = author.model_copy(update={"born": born})
            self._authors[author_id] = updated
            return updated

    def _find_author_by_name(self, name: str) -> AuthorRead | None:
        for author in self._authors.values():
            if author.name == name:
                return author
        return None

    def _insert_author(self, name: str, born: int | None) -> AuthorRead:
        if len(name) < MIN_AUTHOR_NAME_LENGTH:
            raise IntegrityViolation(
                f"author name must be at least {MIN_AUTHOR_NAME_LENGTH} characters"
            )
        if len(name) > MAX_AUTHOR_NAME_LENGTH:
            # The SQL column length raises DataError, not IntegrityError
            raise StoreError(f"author name longer than {MAX_AUTHOR_NAME_LENGTH} characters")
        if self._find_author_by_name(name) is not None:
            raise IntegrityViolation(f"author name '{name}' already exists")

        author = AuthorRead(id=next(self._author_ids), name=name, born=born)
        self._authors[author.id] = author
        logger.debug(f"Stored author {author.id} ({author.name})")
        return author

    # -------------------------------------------------------------------------
    # Books
    # -------------------------------------------------------------------------
    def find_book_by_title(self, title: str) -> BookRead | None:
        with self._lock:
            for row in self._books.values():
                if row.title == title:
                    return self._to_read(row)
            return None

    def get_book(self, book_id: int) -> BookRead | None:
        with self._lock:
            row = self._books.get(book_id)
            return self._to_read(row) if row else None

    def find_books(
        self,
        author_id: int | None = None,
        genre: str | None = None,
    ) -> list[BookRead]:
        with self._lock:
            rows = self._books.values()
            if author_id is not None:
                rows = [row for row in rows if row.author_id == author_id]
            if genre is not None:
                rows = [row for row in rows if genre in row.genres]
            return [self._to_read(row) for row in rows]

    def create_book(
        self,
        title: str,
        author_id: int,
        published: int,
        genres: list[str],
    ) -> BookRead:
        with self._lock:
            if len(title) < MIN_TITLE_LENGTH:
                raise IntegrityViolation(
                    f"title must be at least {MIN_TITLE_LENGTH} characters"
                )
            if len(title) > MAX_TITLE_LENGTH:
                raise StoreError(f"title longer than {MAX_TITLE_LENGTH} characters")
            if any(len(genre) > MAX_GENRE_LENGTH for genre in genres):
                raise StoreError(f"genre longer than {MAX_GENRE_LENGTH} characters")
            if any(row.title == title for row in self._books.values()):
                raise IntegrityViolation(f"title '{title}' already exists")
            if author_id not in self._authors:
                raise IntegrityViolation(f"author {author_id} does not exist")
            if any(not genre for genre in genres) or len(set(genres)) != len(genres):
                raise IntegrityViolation("genres must be distinct non-empty strings")

            row = _BookRow(
                id=next(self._book_ids),
                title=title,
                published=published,
                author_id=author_id,
                genres=list(genres),
            )
            self._books[row.id] = row
            return self._to_read(row)

    def _to_read(self, row: _BookRow) -> BookRead:
        return BookRead(
            id=row.id,
            title=row.title,
            published=row.published,
            genres=list(row.genres),
            author=self._authors[row.author_id],
        )

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------
    def find_user_by_username(self, username: str) -> UserInDB | None:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user
            return None

    def get_user(self, user_id: int) -> UserInDB | None:
        with self._lock:
            return self._users.get(user_id)

    def create_user(
        self,
        username: str,
        favorite_genre: str | None,
        password_hash: str,
    ) -> UserInDB:
        with self._lock:
            if len(username) < MIN_USERNAME_LENGTH:
                raise IntegrityViolation(
                    f"username must be at least {MIN_USERNAME_LENGTH} characters"
                )
            if any(user.username == username for user in self._users.values()):
                raise IntegrityViolation(f"username '{username}' already exists")

            user = UserInDB(
                id=next(self._user_ids),
                username=username,
                favorite_genre=favorite_genre,
                password_hash=password_hash,
            )
            self._users[user.id] = user
            return user


# Process-wide instance for STORE_BACKEND=memory
_memory_store = MemoryCatalogStore()


def get_memory_store() -> MemoryCatalogStore:
    """Get the shared in-memory store instance."""
    return _memory_store
