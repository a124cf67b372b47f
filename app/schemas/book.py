"""
Book Pydantic Schemas

Validation rules for book data coming in through the addBook mutation.

Genres are treated as a set that remembers its order: blank entries are
rejected, surrounding whitespace is stripped and repeated names are dropped
(the first occurrence keeps its place).
"""

from pydantic import BaseModel, Field, field_validator


class BookCreate(BaseModel):
    """
    Schema for creating a book.

    The author is given by name; the mutation resolves it to an Author row
    (creating one if needed) before the book is stored.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["Clean Code", "Crime and punishment"],
    )

    published: int = Field(
        ...,
        ge=-3000,
        le=2100,
        description="Year of publication; announced editions may be in the future",
        examples=[2008, 1866],
    )

    genres: list[str] = Field(
        default_factory=list,
        description="Genre names, most relevant first",
        examples=[["refactoring"], ["classic", "crime"]],
    )

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        """Reject whitespace-only titles and strip the rest."""
        if not v.strip():
            raise ValueError("Title cannot be empty or whitespace")
        return v.strip()

    @field_validator("genres")
    @classmethod
    def normalize_genres(cls, v: list[str]) -> list[str]:
        """
        Strip genre names and drop duplicates, keeping first occurrences.

        Raises:
            ValueError: If a genre name is blank or longer than 100 characters
        """
        seen: dict[str, None] = {}
        for genre in v:
            name = genre.strip()
            if not name:
                raise ValueError("Genre names cannot be empty")
            if len(name) > 100:
                raise ValueError("Genre names cannot exceed 100 characters")
            seen.setdefault(name, None)
        return list(seen)
