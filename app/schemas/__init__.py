"""
Pydantic Schemas Package

This package contains Pydantic models that validate mutation input before
anything is written to the database.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Validation: Input rules live in one place, independent of the database
2. Decoupling: Database schema can evolve independently of the API
3. Error reporting: Pydantic errors name the offending field

Schema Naming Convention:
- XxxBase: Shared fields
- XxxCreate: Fields required when creating a new record
"""

from app.schemas.author import AuthorBase, AuthorBornUpdate, AuthorCreate
from app.schemas.book import BookCreate
from app.schemas.user import UserCreate

__all__ = [
    "AuthorBase",
    "AuthorCreate",
    "AuthorBornUpdate",
    "BookCreate",
    "UserCreate",
]
