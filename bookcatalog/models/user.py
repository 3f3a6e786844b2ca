"""
User Model

Represents an account that can log in and run authenticated mutations.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from bookcatalog.database import Base

MIN_USERNAME_LENGTH = 3


class User(Base):
    """
    User model.

    Table: users

    Accounts are never updated or deleted. ``password_hash`` holds the
    bcrypt hash checked by the login mutation.

    Example:
        user = User(
            username="mluukkai",
            favorite_genre="refactoring",
            password_hash=hash_password("secret"),
        )
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            f"length(username) >= {MIN_USERNAME_LENGTH}",
            name="ck_users_username_length",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
        comment="Unique login name"
    )

    favorite_genre: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Genre used for personal recommendations"
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the user registered"
    )

    def __repr__(self) -> str:
        return f"User(id={self.id}, username='{self.username}')"
