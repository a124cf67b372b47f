"""
GraphQL Book Type

Defines the Book type for GraphQL queries.
"""

import strawberry

from app.graphql.types.author import AuthorType


@strawberry.type(name="Book")
class BookType:
    """
    GraphQL type representing a book.

    Maps to the Book SQLAlchemy model with its author joined in.
    """

    title: str
    published: int
    author: AuthorType
    id: strawberry.ID
    genres: list[str] = strawberry.field(default_factory=list)
