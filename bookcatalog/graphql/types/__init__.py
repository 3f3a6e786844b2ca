"""
GraphQL Types Package

Types defined here (GraphQL names in parentheses):
- AuthorType (Author): Author with a live book count
- BookType (Book): Book with its author resolved
- UserType (User): Public user information
- TokenType (Token): Login result
"""

from bookcatalog.graphql.types.author import AuthorType
from bookcatalog.graphql.types.book import BookType
from bookcatalog.graphql.types.user import TokenType, UserType

__all__ = [
    "AuthorType",
    "BookType",
    "UserType",
    "TokenType",
]
