"""
User Model

Represents a user who can log in and modify the library.

Users are created by the createUser mutation. A user may be created with
or without a password:
- with a password: login checks it against the stored bcrypt hash
- without: login accepts the configured shared password
"""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """
    User model representing registered users in the system.

    Table: users

    Indexes:
    - Primary key on id (automatic)
    - username: Unique index for login lookups

    Example:
        user = User(username="mluukkai", favourite_genre="refactoring")
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
        comment="Unique username used to log in"
    )

    favourite_genre: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="The user's favourite genre"
    )

    hashed_password: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Bcrypt hashed password (null = shared login password)"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"User(id={self.id}, username='{self.username}')"
