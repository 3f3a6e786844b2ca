"""
GraphQL Mutation Resolvers

Defines all write operations (mutations) for the GraphQL API.
addBook and editAuthor require authentication; the check happens in
CatalogService before any store access.

Errors raised here are CatalogError subclasses. Their ``extensions``
(code, kind, invalidArgs) end up in the GraphQL error response.
"""

import strawberry
from strawberry.types import Info

from bookcatalog.graphql.context import CatalogContext
from bookcatalog.graphql.queries import (
    author_to_graphql,
    book_to_graphql,
    user_to_graphql,
)
from bookcatalog.graphql.types.author import AuthorType
from bookcatalog.graphql.types.book import BookType
from bookcatalog.graphql.types.user import TokenType, UserType


@strawberry.type
class Mutation:
    """
    GraphQL Mutation type containing all write operations.

    Authenticate by sending ``Authorization: Bearer <token>`` with the
    token returned by ``login``.
    """

    # =========================================================================
    # Catalog Mutations
    # =========================================================================

    @strawberry.mutation(description="Add a book, creating its author if needed (requires auth)")
    def add_book(
        self,
        info: Info[CatalogContext, None],
        title: str,
        author: str,
        published: int,
        genres: list[str],
    ) -> BookType | None:
        book = info.context.catalog.add_book(
            current_user=info.context.current_user,
            title=title,
            author_name=author,
            published=published,
            genres=genres,
        )
        return book_to_graphql(book)

    @strawberry.mutation(description="Add an author")
    def add_author(
        self,
        info: Info[CatalogContext, None],
        name: str,
        born: int | None = None,
    ) -> AuthorType | None:
        return author_to_graphql(info.context.catalog.add_author(name, born))

    @strawberry.mutation(description="Set an author's birth year (requires auth)")
    def edit_author(
        self,
        info: Info[CatalogContext, None],
        name: str,
        born: int,
    ) -> AuthorType | None:
        """
        Update an author's birth year.

        Returns null when no author has the given name.
        """
        author = info.context.catalog.edit_author(
            current_user=info.context.current_user,
            name=name,
            born=born,
        )
        if author is None:
            return None
        return author_to_graphql(author)

    # =========================================================================
    # Account Mutations
    # =========================================================================

    @strawberry.mutation(description="Register a new user account")
    def create_user(
        self,
        info: Info[CatalogContext, None],
        username: str,
        favorite_genre: str | None = None,
    ) -> UserType | None:
        user = info.context.accounts.create_user(username, favorite_genre)
        return user_to_graphql(user)

    @strawberry.mutation(description="Login with username and password")
    def login(
        self,
        info: Info[CatalogContext, None],
        username: str,
        password: str,
    ) -> TokenType | None:
        return TokenType(value=info.context.accounts.login(username, password))
