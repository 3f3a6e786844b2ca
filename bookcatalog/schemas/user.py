"""
User Pydantic Schemas

Schemas:
- UserRead: Public user data (never exposes the password hash)
- UserInDB: Internal schema with the password hash, used only for login
"""

from pydantic import BaseModel, ConfigDict, Field


class UserRead(BaseModel):
    """A user as exposed through the API."""

    id: int
    username: str = Field(..., examples=["mluukkai"])
    favorite_genre: str | None = Field(default=None, examples=["refactoring"])

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
    )


class UserInDB(UserRead):
    """
    Internal user schema including the stored credential.

    Never return this from a resolver; convert to UserRead first.
    """

    password_hash: str

    def public(self) -> UserRead:
        return UserRead(
            id=self.id,
            username=self.username,
            favorite_genre=self.favorite_genre,
        )
