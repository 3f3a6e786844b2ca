"""
GraphQL Query Resolvers

Defines all read operations (queries) for the GraphQL API.
Resolvers stay thin: filtering rules live in CatalogService.
"""

import strawberry
from strawberry.types import Info

from bookcatalog.graphql.context import CatalogContext
from bookcatalog.graphql.types.author import AuthorType
from bookcatalog.graphql.types.book import BookType
from bookcatalog.graphql.types.user import UserType
from bookcatalog.schemas import AuthorRead, BookRead, UserRead


def author_to_graphql(author: AuthorRead) -> AuthorType:
    """Convert an AuthorRead model to GraphQL AuthorType."""
    return AuthorType(
        id=strawberry.ID(str(author.id)),
        name=author.name,
        born=author.born,
    )


def book_to_graphql(book: BookRead) -> BookType:
    """Convert a BookRead model to GraphQL BookType."""
    return BookType(
        id=strawberry.ID(str(book.id)),
        title=book.title,
        published=book.published,
        author=author_to_graphql(book.author),
        genres=list(book.genres),
    )


def user_to_graphql(user: UserRead) -> UserType:
    """Convert a UserRead model to GraphQL UserType."""
    return UserType(
        id=strawberry.ID(str(user.id)),
        username=user.username,
        favorite_genre=user.favorite_genre,
    )


@strawberry.type
class Query:
    """GraphQL Query type containing all read operations."""

    @strawberry.field(description="Total number of books")
    def book_count(self, info: Info[CatalogContext, None]) -> int:
        return info.context.catalog.book_count()

    @strawberry.field(description="Total number of authors")
    def author_count(self, info: Info[CatalogContext, None]) -> int:
        return info.context.catalog.author_count()

    @strawberry.field(description="List books, optionally filtered by author name and/or genre")
    def all_books(
        self,
        info: Info[CatalogContext, None],
        author: str | None = None,
        genre: str | None = None,
    ) -> list[BookType]:
        """
        Get books matching the given filters.

        Args:
            author: Exact author name; an unknown name gives an empty list
            genre: Genre the book must carry; "all genres" disables the filter
        """
        books = info.context.catalog.all_books(author_name=author, genre=genre)
        return [book_to_graphql(b) for b in books]

    @strawberry.field(description="List every author")
    def all_authors(self, info: Info[CatalogContext, None]) -> list[AuthorType]:
        return [author_to_graphql(a) for a in info.context.catalog.all_authors()]

    @strawberry.field(description="Get the currently authenticated user")
    def me(self, info: Info[CatalogContext, None]) -> UserType | None:
        user = info.context.current_user
        if user is None:
            return None
        return user_to_graphql(user)
