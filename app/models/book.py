"""
Book Model

The central model of the Library API, representing books in the database.

This file also contains the BookGenre association model linking books to
genres.

WHY an association model instead of a plain Table?
==================================================
A book's genres are an ordered list ("fantasy", "classic" is not the same
listing as "classic", "fantasy"). A plain association table only stores
the pair of foreign keys, so the order would be lost. BookGenre adds a
``position`` column and the Book.genre_links relationship is ordered by it.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.author import Author
    from app.models.genre import Genre


class BookGenre(Base):
    """
    Association between a book and one of its genres.

    Table: book_genres
    """

    __tablename__ = "book_genres"

    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    )
    genre_id: Mapped[int] = mapped_column(
        ForeignKey("genres.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Index of the genre in the book's genre list"
    )

    # Always needed together with the link, so load it in the same query
    genre: Mapped["Genre"] = relationship("Genre", lazy="joined")

    def __repr__(self) -> str:
        return f"BookGenre(book_id={self.book_id}, genre_id={self.genre_id}, position={self.position})"


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (required)
    - published: Year of publication (required)

    Relationships:
    - author: Many-to-One (a book has exactly one author)
    - genre_links: ordered links to Genre rows

    Example:
        book = Book(title="Clean Code", published=2008, author=author)
        book.genre_links = [BookGenre(genre=refactoring, position=0)]
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    published: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Year of publication"
    )

    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"),
        index=True,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author: Mapped["Author"] = relationship(
        "Author",
        back_populates="books",
    )

    genre_links: Mapped[list[BookGenre]] = relationship(
        BookGenre,
        order_by=BookGenre.position,
        cascade="all, delete-orphan",
    )

    @property
    def genres(self) -> list[str]:
        """Genre names in their stored order."""
        return [link.genre.name for link in self.genre_links]

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', published={self.published})"
