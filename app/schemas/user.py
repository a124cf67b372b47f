"""
User Pydantic Schemas

Validation rules for the createUser mutation.

The password is optional. Users created without one log in with the
shared login password configured for the server.
"""

import re

from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """
    Schema for user creation.

    Usernames are case-sensitive and stored exactly as given.
    """

    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Unique username (3-50 characters, alphanumeric and underscores)",
        examples=["mluukkai", "jane_doe123"],
    )

    favourite_genre: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="The user's favourite genre",
        examples=["refactoring", "crime"],
    )

    password: str | None = Field(
        default=None,
        min_length=8,
        max_length=72,  # bcrypt ignores anything past 72 bytes
        description="Optional personal password",
    )

    @field_validator("username")
    @classmethod
    def username_must_be_valid(cls, v: str) -> str:
        """
        Validate username format.

        Rules:
        - 3-50 characters
        - Only alphanumeric and underscores
        - Must start with a letter
        """
        if not re.match(r"^[a-zA-Z][a-zA-Z0-9_]*$", v):
            raise ValueError(
                "Username must start with a letter and contain only "
                "letters, numbers, and underscores"
            )
        return v

    @field_validator("favourite_genre")
    @classmethod
    def genre_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Favourite genre cannot be empty or whitespace")
        return v.strip()
