#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample data for development and testing.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

This script:
1. Connects to the database using app settings
2. Clears existing data (optional)
3. Creates sample authors and books (genres are created with the books)
4. Creates a demo user that logs in with the shared login password
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.database import SessionLocal, create_tables
from app.models import Author, Book, BookGenre, Genre, User
from app.services import library, users


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    for model in (BookGenre, Book, Genre, Author, User):
        db.execute(delete(model))
    db.commit()
    print("Data cleared.")


def create_authors(db: Session) -> dict[str, Author]:
    """Create sample authors."""
    print("Creating authors...")
    authors_data = [
        {"name": "Robert Martin", "born": 1952},
        {"name": "Martin Fowler", "born": 1963},
        {"name": "Fyodor Dostoevsky", "born": 1821},
        {"name": "Joshua Kerievsky"},
        {"name": "Sandi Metz"},
    ]

    authors = {}
    for data in authors_data:
        author = library.create_author(db, data["name"], born=data.get("born"))
        authors[author.name] = author

    print(f"Created {len(authors)} authors.")
    return authors


def create_books(db: Session, authors: dict[str, Author]) -> list[Book]:
    """Create sample books by the sample authors."""
    print("Creating books...")

    books_data = [
        {
            "title": "Clean Code",
            "published": 2008,
            "author": "Robert Martin",
            "genres": ["refactoring"],
        },
        {
            "title": "Agile software development",
            "published": 2002,
            "author": "Robert Martin",
            "genres": ["agile", "patterns", "design"],
        },
        {
            "title": "Refactoring, edition 2",
            "published": 2018,
            "author": "Martin Fowler",
            "genres": ["refactoring"],
        },
        {
            "title": "Refactoring to patterns",
            "published": 2008,
            "author": "Joshua Kerievsky",
            "genres": ["refactoring", "patterns"],
        },
        {
            "title": "Practical Object-Oriented Design, An Agile Primer Using Ruby",
            "published": 2012,
            "author": "Sandi Metz",
            "genres": ["refactoring", "design"],
        },
        {
            "title": "Crime and punishment",
            "published": 1866,
            "author": "Fyodor Dostoevsky",
            "genres": ["classic", "crime"],
        },
        {
            "title": "Demons",
            "published": 1872,
            "author": "Fyodor Dostoevsky",
            "genres": ["classic", "revolution"],
        },
    ]

    books = []
    for data in books_data:
        books.append(
            library.create_book(
                db,
                title=data["title"],
                published=data["published"],
                genres=data["genres"],
                author=authors[data["author"]],
            )
        )

    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        authors = create_authors(db)
        books = create_books(db, authors)
        user = users.create_user(db, "mluukkai", "refactoring")

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print(f"\nSummary:")
        print(f"  - Authors: {len(authors)}")
        print(f"  - Books: {len(books)}")
        print(f"  - Demo user: {user.username} (shared login password)")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
