"""
Genre Model

Represents a book genre in the database.

Genres are created on demand when a book lists a genre name that has not
been seen before. Filtering books by genre joins through book_genres.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Genre(Base):
    """
    Genre model representing book categories.

    Table: genres

    Indexes:
    - name: Unique index for preventing duplicate genres

    Example:
        genre = Genre(name="refactoring")
    """

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
        comment="Genre name (e.g., 'refactoring', 'crime')"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"Genre(id={self.id}, name='{self.name}')"
