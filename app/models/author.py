"""
Author Model

Represents an author in the library database.

Authors are created on demand: adding a book whose author name is not yet
known creates the author. The name is the natural key, enforced by a
unique constraint.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.book import Book


class Author(Base):
    """
    Author model representing writers in the system.

    Table: authors

    Relationships:
    - books: One-to-Many (every book references exactly one author)

    Indexes:
    - Primary key on id (automatic)
    - name: Unique index, used for lookups by name

    Example:
        author = Author(name="Robert Martin", born=1952)
        db.add(author)
        db.commit()
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)

    # unique=True makes concurrent "create author if missing" safe:
    # the second insert fails instead of producing a duplicate
    name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="Author's full name"
    )

    born: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Year of birth"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the author record was created"
    )

    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
    )

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name='{self.name}')"
