"""
SQL Catalog Store

CatalogStore backed by SQLAlchemy 2.0 (PostgreSQL in production, SQLite
in tests).

Every write commits immediately. When the database rejects a write
(unique or CHECK constraint), the session is rolled back and the error is
re-raised as IntegrityViolation so callers never see SQLAlchemy types.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from bookcatalog.models import Author, Book, BookGenre, User
from bookcatalog.schemas import AuthorRead, BookRead, UserInDB
from bookcatalog.store.base import CatalogStore, IntegrityViolation, StoreError

logger = logging.getLogger(__name__)


def _book_query():
    """SELECT for books with author and genres eagerly loaded."""
    return select(Book).options(
        selectinload(Book.author),
        selectinload(Book.genre_links),
    )


class SqlCatalogStore(CatalogStore):
    """
    CatalogStore over one SQLAlchemy session.

    One instance per request, like the session it wraps.
    """

    def __init__(self, db: Session):
        self.db = db

    def release(self) -> None:
        # Reads autobegin a transaction that pins a pooled connection
        if self.db.in_transaction():
            self.db.rollback()

    # -------------------------------------------------------------------------
    # Counts
    # -------------------------------------------------------------------------
    def count_books(self) -> int:
        return self.db.execute(select(func.count()).select_from(Book)).scalar() or 0

    def count_authors(self) -> int:
        return self.db.execute(select(func.count()).select_from(Author)).scalar() or 0

    def count_books_by_author(self, author_id: int) -> int:
        stmt = select(func.count()).select_from(Book).where(Book.author_id == author_id)
        return self.db.execute(stmt).scalar() or 0

    # -------------------------------------------------------------------------
    # Authors
    # -------------------------------------------------------------------------
    def find_author_by_name(self, name: str) -> AuthorRead | None:
        author = self._author_by_name(name)
        return AuthorRead.model_validate(author) if author else None

    def get_author(self, author_id: int) -> AuthorRead | None:
        author = self.db.get(Author, author_id)
        return AuthorRead.model_validate(author) if author else None

    def list_authors(self) -> list[AuthorRead]:
        authors = self.db.execute(select(Author).order_by(Author.id)).scalars().all()
        return [AuthorRead.model_validate(a) for a in authors]

    def create_author(self, name: str, born: int | None = None) -> AuthorRead:
        author = Author(name=name, born=born)
        self._commit(author)
        return AuthorRead.model_validate(author)

    def get_or_create_author(self, name: str) -> AuthorRead:
        existing = self._author_by_name(name)
        if existing is not None:
            return AuthorRead.model_validate(existing)

        try:
            return self.create_author(name)
        except IntegrityViolation:
            # Lost a race with a concurrent insert of the same name
            winner = self._author_by_name(name)
            if winner is None:
                raise
            logger.info(f"Author '{name}' was created concurrently; reusing it")
            return AuthorRead.model_validate(winner)

    def set_author_born(self, author_id: int, born: int) -> AuthorRead:
        author = self.db.get(Author, author_id)
        if author is None:
            raise StoreError(f"Author with ID {author_id} not found")
        author.born = born
        self._commit(author)
        return AuthorRead.model_validate(author)

    def _author_by_name(self, name: str) -> Author | None:
        stmt = select(Author).where(Author.name == name)
        return self.db.execute(stmt).scalar_one_or_none()

    # -------------------------------------------------------------------------
    # Books
    # -------------------------------------------------------------------------
    def find_book_by_title(self, title: str) -> BookRead | None:
        book = self.db.execute(_book_query().where(Book.title == title)).scalar_one_or_none()
        return BookRead.model_validate(book) if book else None

    def get_book(self, book_id: int) -> BookRead | None:
        book = self.db.execute(_book_query().where(Book.id == book_id)).scalar_one_or_none()
        return BookRead.model_validate(book) if book else None

    def find_books(
        self,
        author_id: int | None = None,
        genre: str | None = None,
    ) -> list[BookRead]:
        stmt = _book_query()

        if author_id is not None:
            stmt = stmt.where(Book.author_id == author_id)

        if genre is not None:
            in_genre = select(BookGenre.book_id).where(BookGenre.name == genre)
            stmt = stmt.where(Book.id.in_(in_genre))

        books = self.db.execute(stmt.order_by(Book.id)).scalars().all()
        return [BookRead.model_validate(b) for b in books]

    def create_book(
        self,
        title: str,
        author_id: int,
        published: int,
        genres: list[str],
    ) -> BookRead:
        book = Book(
            title=title,
            author_id=author_id,
            published=published,
            genre_links=[
                BookGenre(position=position, name=name)
                for position, name in enumerate(genres)
            ],
        )
        self._commit(book)

        created = self.get_book(book.id)
        if created is None:
            raise StoreError(f"Book {book.id} vanished after insert")
        return created

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------
    def find_user_by_username(self, username: str) -> UserInDB | None:
        stmt = select(User).where(User.username == username)
        user = self.db.execute(stmt).scalar_one_or_none()
        return UserInDB.model_validate(user) if user else None

    def get_user(self, user_id: int) -> UserInDB | None:
        user = self.db.get(User, user_id)
        return UserInDB.model_validate(user) if user else None

    def create_user(
        self,
        username: str,
        favorite_genre: str | None,
        password_hash: str,
    ) -> UserInDB:
        user = User(
            username=username,
            favorite_genre=favorite_genre,
            password_hash=password_hash,
        )
        self._commit(user)
        return UserInDB.model_validate(user)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def _commit(self, instance) -> None:
        """Add, commit and refresh ``instance``; translate database errors."""
        self.db.add(instance)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise IntegrityViolation(str(e.orig)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error while saving {instance!r}: {e}")
            raise StoreError(str(e)) from e
        self.db.refresh(instance)
