"""
Book Pydantic Schemas

BookRead always carries the resolved author, never a bare author id.
"""

from pydantic import BaseModel, ConfigDict, Field

from bookcatalog.schemas.author import AuthorRead


class BookRead(BaseModel):
    """
    A book with its author joined in.

    Example:
        {
            "id": 1,
            "title": "Clean Code",
            "published": 2008,
            "genres": ["refactoring"],
            "author": {"id": 1, "name": "Robert Martin", "born": 1952}
        }
    """

    id: int
    title: str = Field(..., examples=["Clean Code"])
    published: int = Field(..., description="Publication year", examples=[2008])
    genres: list[str] = Field(default_factory=list, examples=[["refactoring"]])
    author: AuthorRead

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
    )
