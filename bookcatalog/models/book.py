"""
Book Model

The central model of the catalog.

This file also contains the BookGenre model holding a book's genres.

WHY a genre table instead of an array column?
=============================================
Genres are plain strings attached to one book, in the order the client
sent them. A child table with a position column:
- keeps the order stable
- lets "books in genre X" be a portable indexed query
  (works the same on PostgreSQL and SQLite)
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookcatalog.database import Base

if TYPE_CHECKING:
    from bookcatalog.models.author import Author

MIN_TITLE_LENGTH = 5
MAX_TITLE_LENGTH = 500
MAX_GENRE_LENGTH = 100


class Book(Base):
    """
    Book model representing books in the catalog.

    Table: books

    Fields:
    - title: Book title (unique, at least MIN_TITLE_LENGTH characters)
    - published: Publication year
    - author_id: Reference to the author

    Relationships:
    - author: Many-to-One
    - genre_links: One-to-Many, ordered by position

    Books are immutable once created.
    """

    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint(
            f"length(title) >= {MIN_TITLE_LENGTH}",
            name="ck_books_title_length",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(MAX_TITLE_LENGTH),
        unique=True,
        index=True,
        nullable=False,
        comment="Book title"
    )

    published: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Year of publication"
    )

    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"),
        index=True,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    author: Mapped["Author"] = relationship(
        "Author",
        back_populates="books",
    )

    genre_links: Mapped[list["BookGenre"]] = relationship(
        "BookGenre",
        back_populates="book",
        cascade="all, delete-orphan",
        order_by="BookGenre.position",
    )

    @property
    def genres(self) -> list[str]:
        """Genre names in the order they were given."""
        return [link.name for link in self.genre_links]

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', published={self.published})"


class BookGenre(Base):
    """
    One genre of one book.

    Table: book_genres

    (book_id, position) is the primary key; (book_id, name) is unique so a
    book never lists the same genre twice.
    """

    __tablename__ = "book_genres"
    __table_args__ = (
        CheckConstraint("length(name) >= 1", name="ck_book_genres_name_not_empty"),
        UniqueConstraint("book_id", "name", name="uq_book_genres_book_name"),
    )

    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    )

    position: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        comment="Zero-based position in the book's genre list"
    )

    name: Mapped[str] = mapped_column(
        String(MAX_GENRE_LENGTH),
        index=True,
        nullable=False,
        comment="Genre name"
    )

    book: Mapped["Book"] = relationship(
        "Book",
        back_populates="genre_links",
    )

    def __repr__(self) -> str:
        return f"BookGenre(book_id={self.book_id}, position={self.position}, name='{self.name}')"
