"""
GraphQL Types Package

This package contains all GraphQL type definitions that map to our
SQLAlchemy models. Types are defined using Strawberry's decorator syntax.

Types defined here:
- AuthorType: Author with its computed book count
- BookType: Book with its author and genres
- UserType: Public user information
- TokenType: Login result
"""

from app.graphql.types.author import AuthorType
from app.graphql.types.book import BookType
from app.graphql.types.user import TokenType, UserType

__all__ = [
    "AuthorType",
    "BookType",
    "UserType",
    "TokenType",
]
