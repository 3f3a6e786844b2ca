"""
GraphQL Book Type

Defines the Book type for GraphQL queries.
"""

import strawberry

from bookcatalog.graphql.types.author import AuthorType


@strawberry.type(name="Book")
class BookType:
    """
    GraphQL type representing a book.

    The author is always resolved to the full Author object.
    """

    id: strawberry.ID
    title: str
    published: int
    author: AuthorType
    genres: list[str]
