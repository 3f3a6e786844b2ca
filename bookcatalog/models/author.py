"""
Author Model

Represents an author in the catalog.

SQLAlchemy 2.0 Features Used:
- mapped_column(): Columns with full type support
- Mapped[]: Type hint wrapper for SQLAlchemy columns
- relationship(): One-to-many link to Book
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookcatalog.database import Base

if TYPE_CHECKING:
    from bookcatalog.models.book import Book

MIN_AUTHOR_NAME_LENGTH = 4
MAX_AUTHOR_NAME_LENGTH = 255


class Author(Base):
    """
    Author model representing writers in the catalog.

    Table: authors

    Constraints:
    - name is unique and at least MIN_AUTHOR_NAME_LENGTH characters long

    Relationships:
    - books: One-to-Many (a book references exactly one author)

    Example:
        author = Author(name="Robert Martin", born=1952)
        db.add(author)
        db.commit()
    """

    __tablename__ = "authors"
    __table_args__ = (
        CheckConstraint(
            f"length(name) >= {MIN_AUTHOR_NAME_LENGTH}",
            name="ck_authors_name_length",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(
        String(MAX_AUTHOR_NAME_LENGTH),
        unique=True,
        index=True,
        nullable=False,
        comment="Author's full name (natural key)"
    )

    # Year only; unknown for authors created implicitly by addBook
    born: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Birth year"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the author record was created"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="When the author record was last updated"
    )

    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
    )

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name='{self.name}')"
