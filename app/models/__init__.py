"""
SQLAlchemy Models Package

This package contains all database models for the Library API.

Model Relationships:
- Author <- Book: One-to-Many (every book has one author,
                  an author can write many books)
- Genre <-> Book: Many-to-Many through BookGenre, which keeps the
                  order of a book's genres

Import all models here to:
1. Make them available as: from app.models import Book, Author, Genre
2. Ensure create_tables() sees every table
"""

from app.models.author import Author
from app.models.genre import Genre
from app.models.book import Book, BookGenre
from app.models.user import User

__all__ = [
    "Author",
    "Genre",
    "Book",
    "BookGenre",
    "User",
]
