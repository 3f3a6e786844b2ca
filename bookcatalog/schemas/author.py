"""
Author Pydantic Schemas

Read models returned by every catalog store implementation.

model_config with from_attributes=True lets the SQL store build these
straight from ORM objects:

    AuthorRead.model_validate(orm_author)
"""

from pydantic import BaseModel, ConfigDict, Field


class AuthorRead(BaseModel):
    """An author as seen by the service layer."""

    id: int = Field(..., description="Store-generated identifier")
    name: str = Field(..., description="Author's full name", examples=["Robert Martin"])
    born: int | None = Field(default=None, description="Birth year", examples=[1952])

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
    )
