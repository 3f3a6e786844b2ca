"""
Pydantic Schemas Package

Read models shared by the catalog stores, services and GraphQL layer.
"""

from bookcatalog.schemas.author import AuthorRead
from bookcatalog.schemas.book import BookRead
from bookcatalog.schemas.user import UserInDB, UserRead

__all__ = [
    "AuthorRead",
    "BookRead",
    "UserRead",
    "UserInDB",
]
