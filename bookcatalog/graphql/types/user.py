"""
GraphQL User Type

Defines the User and Token types. Only exposes public/safe fields.
"""

import strawberry


@strawberry.type(name="User")
class UserType:
    """GraphQL type representing a user. The password hash never leaves the store."""

    id: strawberry.ID
    username: str
    favorite_genre: str | None = None


@strawberry.type(name="Token")
class TokenType:
    """
    Response type for the login mutation.

    ``value`` is sent back as ``Authorization: Bearer <value>``.
    """

    value: str
