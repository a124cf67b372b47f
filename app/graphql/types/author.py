"""
GraphQL Author Type

Defines the Author type for GraphQL queries.
"""

import strawberry


@strawberry.type(name="Author")
class AuthorType:
    """
    GraphQL type representing a book author.

    Maps to the Author SQLAlchemy model. ``book_count`` is computed by the
    resolver that builds the object; it is never null.
    """

    id: strawberry.ID
    name: str
    born: int | None = None
    book_count: int = 0
