"""
GraphQL Author Type

Defines the Author type for GraphQL queries.
"""

import strawberry
from strawberry.types import Info

from bookcatalog.graphql.context import CatalogContext


@strawberry.type(name="Author")
class AuthorType:
    """
    GraphQL type representing a book author.

    ``bookCount`` is not stored; it is counted each time it is selected.
    """

    id: strawberry.ID
    name: str
    born: int | None = None

    @strawberry.field(description="Number of books by this author")
    def book_count(self, info: Info[CatalogContext, None]) -> int:
        return info.context.catalog.author_book_count(int(self.id))
