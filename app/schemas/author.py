"""
Author Pydantic Schemas

Validation rules for author data coming in through GraphQL mutations.

Pydantic v2 Features Used:
- Field(): Define constraints and metadata
- field_validator: Validate and transform field values
"""

from pydantic import BaseModel, Field, field_validator


class AuthorBase(BaseModel):
    """
    Base schema with shared author fields.

    Validation rules for the name are defined once here and reused by
    every author schema.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author's full name",
        examples=["Robert Martin", "Fyodor Dostoevsky"],
    )

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        """
        Validate that name is not just whitespace.

        Returns:
            The name with surrounding whitespace removed

        Raises:
            ValueError: If the name is blank
        """
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v.strip()


class AuthorCreate(AuthorBase):
    """Schema for creating a new author."""

    born: int | None = Field(
        default=None,
        ge=-3000,
        le=2100,
        description="Year of birth",
        examples=[1952, 1821],
    )


class AuthorBornUpdate(BaseModel):
    """Schema for the editAuthor mutation."""

    born: int = Field(
        ...,
        ge=-3000,
        le=2100,
        description="Year of birth",
    )
