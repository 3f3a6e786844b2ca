"""Catalog store interface (repository pattern).

Stores are swappable and return pydantic read models, never ORM objects.
Each method is atomic on its own; sequences of calls are not.
"""

from abc import ABC, abstractmethod

from bookcatalog.schemas import AuthorRead, BookRead, UserInDB


class StoreError(Exception):
    """Base class for failures raised by a catalog store."""


class IntegrityViolation(StoreError):
    """A write broke a store constraint (uniqueness, minimum length, ...)."""


class CatalogStore(ABC):
    """Interface for Author, Book and User persistence."""

    def release(self) -> None:
        """
        Give back any resources held between calls.

        Called before a long-lived consumer (a subscription) goes idle.
        The store stays usable afterwards.
        """

    # -------------------------------------------------------------------------
    # Counts
    # -------------------------------------------------------------------------
    @abstractmethod
    def count_books(self) -> int:
        """Return the number of stored books."""
        ...

    @abstractmethod
    def count_authors(self) -> int:
        """Return the number of stored authors."""
        ...

    @abstractmethod
    def count_books_by_author(self, author_id: int) -> int:
        """Return the number of books referencing the author."""
        ...

    # -------------------------------------------------------------------------
    # Authors
    # -------------------------------------------------------------------------
    @abstractmethod
    def find_author_by_name(self, name: str) -> AuthorRead | None:
        """Return the author with exactly this name, or None."""
        ...

    @abstractmethod
    def get_author(self, author_id: int) -> AuthorRead | None:
        """Return an author by ID, or None if not found."""
        ...

    @abstractmethod
    def list_authors(self) -> list[AuthorRead]:
        """Return all authors in insertion order."""
        ...

    @abstractmethod
    def create_author(self, name: str, born: int | None = None) -> AuthorRead:
        """Persist a new author. Raises IntegrityViolation on constraint failure."""
        ...

    @abstractmethod
    def get_or_create_author(self, name: str) -> AuthorRead:
        """
        Return the author named ``name``, creating it (born unset) if absent.

        Idempotent on name: concurrent callers get the same author.
        Raises IntegrityViolation if the name is not storable.
        """
        ...

    @abstractmethod
    def set_author_born(self, author_id: int, born: int) -> AuthorRead:
        """Update an author's birth year and return the stored author."""
        ...

    # -------------------------------------------------------------------------
    # Books
    # -------------------------------------------------------------------------
    @abstractmethod
    def find_book_by_title(self, title: str) -> BookRead | None:
        """Return the book with exactly this title, or None."""
        ...

    @abstractmethod
    def get_book(self, book_id: int) -> BookRead | None:
        """Return a book (author joined) by ID, or None if not found."""
        ...

    @abstractmethod
    def find_books(
        self,
        author_id: int | None = None,
        genre: str | None = None,
    ) -> list[BookRead]:
        """
        Return books in insertion order, author joined.

        Filters combine with AND; None means "no filter".
        """
        ...

    @abstractmethod
    def create_book(
        self,
        title: str,
        author_id: int,
        published: int,
        genres: list[str],
    ) -> BookRead:
        """Persist a new book. Raises IntegrityViolation on constraint failure."""
        ...

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------
    @abstractmethod
    def find_user_by_username(self, username: str) -> UserInDB | None:
        """Return the user with this username, or None."""
        ...

    @abstractmethod
    def get_user(self, user_id: int) -> UserInDB | None:
        """Return a user by ID, or None if not found."""
        ...

    @abstractmethod
    def create_user(
        self,
        username: str,
        favorite_genre: str | None,
        password_hash: str,
    ) -> UserInDB:
        """Persist a new user. Raises IntegrityViolation on constraint failure."""
        ...
