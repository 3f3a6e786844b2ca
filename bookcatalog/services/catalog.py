"""
Catalog Service

Business rules for books and authors, independent of GraphQL and of the
storage engine. Resolvers call this service; the service calls a
CatalogStore and announces new books through a BookEventSink.

Query Rules:
============
allBooks(author, genre) resolves four argument combinations:

    author  genre         result
    ------  -----------   ------------------------------------------
    -       -             every book
    name    -             books whose author is the named author
    -       g             books whose genres contain g
    name    g             both conditions

The genre "all genres" means "no genre filter". An author name that
matches no author yields an empty list, never an error.

addBook Sequence:
=================
1. require a current user (no store access before this check)
2. validate title/author name/genres, including title uniqueness
3. find or create the author by name
4. insert the book
5. re-read the book with its author joined
6. notify subscribers (never fails the mutation)

The steps are not one transaction. The store's unique constraints catch
what the point-in-time checks miss when two requests race.
"""

import logging

from bookcatalog.errors import (
    AuthenticationRequired,
    PersistenceFailure,
    ValidationError,
)
from bookcatalog.models import (
    MAX_AUTHOR_NAME_LENGTH,
    MAX_GENRE_LENGTH,
    MAX_TITLE_LENGTH,
    MIN_AUTHOR_NAME_LENGTH,
    MIN_TITLE_LENGTH,
)
from bookcatalog.schemas import AuthorRead, BookRead, UserRead
from bookcatalog.services.events import BookEventSink
from bookcatalog.store import CatalogStore, IntegrityViolation, StoreError

logger = logging.getLogger(__name__)

ALL_GENRES = "all genres"

ADD_BOOK_RULES_MESSAGE = (
    "Title must be unique and with length min 5 chars, author name min 4 chars"
)


def require_user(current_user: UserRead | None) -> UserRead:
    """Return the current user or raise AuthenticationRequired."""
    if current_user is None:
        raise AuthenticationRequired()
    return current_user


def normalize_genres(genres: list[str]) -> list[str]:
    """Drop repeated genres, keeping the first occurrence's position."""
    return list(dict.fromkeys(genres))


class CatalogService:
    """
    Queries and mutations over the book/author catalog.

    Args:
        store: Where authors and books live
        events: Output port notified once per created book
    """

    def __init__(self, store: CatalogStore, events: BookEventSink):
        self.store = store
        self.events = events

    # =========================================================================
    # Queries
    # =========================================================================

    def book_count(self) -> int:
        return self.store.count_books()

    def author_count(self) -> int:
        return self.store.count_authors()

    def all_books(
        self,
        author_name: str | None = None,
        genre: str | None = None,
    ) -> list[BookRead]:
        """
        List books, optionally filtered by author name and/or genre.

        Empty strings count as "not provided".
        """
        genre_filter = genre if genre and genre != ALL_GENRES else None

        author_id = None
        if author_name:
            author = self.store.find_author_by_name(author_name)
            if author is None:
                return []
            author_id = author.id

        return self.store.find_books(author_id=author_id, genre=genre_filter)

    def all_authors(self) -> list[AuthorRead]:
        return self.store.list_authors()

    def author_book_count(self, author_id: int) -> int:
        """Live number of books referencing the author (never stored)."""
        return self.store.count_books_by_author(author_id)

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_author(self, name: str, born: int | None = None) -> AuthorRead:
        """
        Create an author.

        Raises:
            PersistenceFailure: the store rejected the author (name too
                short or already taken)
        """
        try:
            author = self.store.create_author(name, born)
        except StoreError as e:
            raise PersistenceFailure(
                "Adding new author failed",
                invalid_args={"name": name, "born": born},
                cause=e,
            ) from e

        logger.info(f"Created author {author.id} ({author.name})")
        return author

    def add_book(
        self,
        current_user: UserRead | None,
        title: str,
        author_name: str,
        published: int,
        genres: list[str],
    ) -> BookRead:
        """
        Create a book, creating its author on first mention.

        Raises:
            AuthenticationRequired: no current user
            ValidationError: duplicate, short or overlong title, short or
                overlong author name, empty or overlong genre
            PersistenceFailure: the author or the book could not be stored
        """
        user = require_user(current_user)

        genres = normalize_genres(genres)
        self._validate_new_book(title, author_name, genres)

        author = self._find_or_create_author(author_name)

        try:
            created = self.store.create_book(
                title=title,
                author_id=author.id,
                published=published,
                genres=genres,
            )
        except IntegrityViolation as e:
            # Another request stored the same title after our check
            raise ValidationError(
                ADD_BOOK_RULES_MESSAGE,
                invalid_args=title,
                details={"reasons": ["duplicate_title"]},
            ) from e
        except StoreError as e:
            raise PersistenceFailure(
                "Adding the book failed",
                invalid_args=title,
                cause=e,
            ) from e

        book = self.store.get_book(created.id) or created
        logger.info(f"User {user.username} added book {book.id} ({book.title})")

        self._notify_book_added(book)
        return book

    def edit_author(
        self,
        current_user: UserRead | None,
        name: str,
        born: int,
    ) -> AuthorRead | None:
        """
        Set an author's birth year.

        Returns None (not an error) when no author has this name.
        """
        require_user(current_user)

        author = self.store.find_author_by_name(name)
        if author is None:
            return None

        return self.store.set_author_born(author.id, born)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _validate_new_book(self, title: str, author_name: str, genres: list[str]) -> None:
        """Run every addBook input check and raise one combined error."""
        reasons = []
        if len(title) < MIN_TITLE_LENGTH:
            reasons.append("title_too_short")
        elif len(title) > MAX_TITLE_LENGTH:
            reasons.append("title_too_long")
        elif self.store.find_book_by_title(title) is not None:
            reasons.append("duplicate_title")
        if len(author_name) < MIN_AUTHOR_NAME_LENGTH:
            reasons.append("author_name_too_short")
        elif len(author_name) > MAX_AUTHOR_NAME_LENGTH:
            reasons.append("author_name_too_long")
        if any(not genre for genre in genres):
            reasons.append("empty_genre")
        if any(len(genre) > MAX_GENRE_LENGTH for genre in genres):
            reasons.append("genre_too_long")

        if reasons:
            raise ValidationError(
                ADD_BOOK_RULES_MESSAGE,
                invalid_args=title,
                details={"reasons": reasons},
            )

    def _find_or_create_author(self, name: str) -> AuthorRead:
        try:
            return self.store.get_or_create_author(name)
        except StoreError as e:
            raise PersistenceFailure(
                "Adding new author failed or author name is too short",
                invalid_args={"author": name},
                cause=e,
            ) from e

    def _notify_book_added(self, book: BookRead) -> None:
        try:
            self.events.book_added(book)
        except Exception as e:
            logger.warning(f"Could not announce book {book.id}: {e}")
