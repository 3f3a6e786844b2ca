"""
SQLAlchemy Models Package

Database models backing the SQL catalog store.

Model Relationships:
- Author -> Book: One-to-Many (every book references one author)
- Book -> BookGenre: One-to-Many (ordered genre names)

Importing this package registers every table on Base.metadata, which
Alembic and create_tables() rely on.
"""

# The order matters for SQLAlchemy to resolve relationships
from bookcatalog.models.author import MAX_AUTHOR_NAME_LENGTH, MIN_AUTHOR_NAME_LENGTH, Author
from bookcatalog.models.book import (
    MAX_GENRE_LENGTH,
    MAX_TITLE_LENGTH,
    MIN_TITLE_LENGTH,
    Book,
    BookGenre,
)
from bookcatalog.models.user import MIN_USERNAME_LENGTH, User

__all__ = [
    "Author",
    "Book",
    "BookGenre",
    "User",
    "MAX_AUTHOR_NAME_LENGTH",
    "MAX_GENRE_LENGTH",
    "MAX_TITLE_LENGTH",
    "MIN_AUTHOR_NAME_LENGTH",
    "MIN_TITLE_LENGTH",
    "MIN_USERNAME_LENGTH",
]
