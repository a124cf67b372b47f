"""
Library Service

Database access for authors and books.

Every function takes the request's Session as its first argument and
either returns ORM objects or raises ValidationError. Writes commit before
returning, so a resolver never has to manage the transaction itself.

Author names are unique. Creating an author whose name already exists
returns the existing row, including when two requests race to create the
same author and the unique constraint rejects the second insert.
"""

import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.models import Author, Book, BookGenre, Genre
from app.schemas import AuthorBornUpdate, AuthorCreate, BookCreate
from app.services.errors import ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# Authors
# =============================================================================
def find_author_by_name(db: Session, name: str) -> Author | None:
    stmt = select(Author).where(Author.name == name.strip())
    return db.execute(stmt).scalar_one_or_none()


def list_authors(db: Session) -> list[Author]:
    stmt = select(Author).order_by(Author.id)
    return list(db.execute(stmt).scalars().all())


def count_authors(db: Session) -> int:
    return db.execute(select(func.count()).select_from(Author)).scalar_one()


def create_author(db: Session, name: str, born: int | None = None) -> Author:
    """
    Create an author, or return the existing one with the same name.

    Raises:
        ValidationError: If the name (or birth year) is invalid, or the row
            could not be written for another reason
    """
    try:
        data = AuthorCreate(name=name, born=born)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc

    existing = find_author_by_name(db, data.name)
    if existing is not None:
        return existing

    author = Author(name=data.name, born=data.born)
    db.add(author)
    try:
        db.commit()
    except IntegrityError as e:
        # Another request inserted the same name first; use its row
        db.rollback()
        existing = find_author_by_name(db, data.name)
        if existing is None:
            raise ValidationError("name", f"Author '{data.name}' could not be saved") from e
        logger.info(f"Author '{data.name}' was created concurrently, reusing it")
        return existing

    db.refresh(author)
    logger.info(f"Created author {author.id} '{author.name}'")
    return author


def get_or_create_author(db: Session, name: str) -> Author:
    """Look an author up by name, creating it when it does not exist yet."""
    author = find_author_by_name(db, name)
    if author is not None:
        return author
    return create_author(db, name)


def set_author_born(db: Session, name: str, born: int) -> Author | None:
    """
    Set an author's birth year.

    Loads the author by name, updates ``born`` on that row and commits.

    Returns:
        The updated author, or None if no author has that name

    Raises:
        ValidationError: If the year is out of range
    """
    try:
        data = AuthorBornUpdate(born=born)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc

    author = find_author_by_name(db, name)
    if author is None:
        return None

    author.born = data.born
    db.commit()
    db.refresh(author)
    logger.info(f"Set birth year of author {author.id} to {author.born}")
    return author


def count_books_by_author(
    db: Session,
    author_ids: list[int] | None = None,
) -> dict[int, int]:
    """
    Count books per author with a single grouped query.

    Authors without books do not appear in the result; callers should
    default to 0.
    """
    stmt = select(Book.author_id, func.count(Book.id)).group_by(Book.author_id)
    if author_ids is not None:
        stmt = stmt.where(Book.author_id.in_(author_ids))
    return {author_id: count for author_id, count in db.execute(stmt).all()}


# =============================================================================
# Books
# =============================================================================
def _get_or_create_genres(db: Session, names: list[str]) -> list[Genre]:
    """Return Genre rows for the names, in the same order, adding missing ones."""
    if not names:
        return []

    stmt = select(Genre).where(Genre.name.in_(names))
    found = {genre.name: genre for genre in db.execute(stmt).scalars().all()}

    genres = []
    for name in names:
        genre = found.get(name)
        if genre is None:
            genre = Genre(name=name)
            db.add(genre)
            found[name] = genre
        genres.append(genre)
    return genres


def validate_book(title: str, published: int, genres: list[str]) -> BookCreate:
    """
    Check book fields without touching the database.

    Raises:
        ValidationError: naming the first invalid field
    """
    try:
        return BookCreate(title=title, published=published, genres=genres)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc


def create_book(
    db: Session,
    title: str,
    published: int,
    genres: list[str],
    author: Author,
) -> Book:
    """
    Create a book by an existing author.

    New genre names are inserted along with the book. If another request
    inserts one of them first, the genres are looked up again and the
    book is written once more.

    Raises:
        ValidationError: If a field is missing or invalid, or the genres
            could not be saved
    """
    data = validate_book(title, published, genres)

    for attempt in range(2):
        book = Book(title=data.title, published=data.published, author=author)
        book.genre_links = [
            BookGenre(genre=genre, position=position)
            for position, genre in enumerate(_get_or_create_genres(db, data.genres))
        ]

        db.add(book)
        try:
            db.commit()
            break
        except IntegrityError as e:
            db.rollback()
            if attempt:
                raise ValidationError(
                    "genres", f"Genres of book '{data.title}' could not be saved"
                ) from e
            logger.info(f"Genres of book '{data.title}' were created concurrently, retrying")

    db.refresh(book)
    logger.info(f"Created book {book.id} '{book.title}' by author {book.author_id}")
    return book


def list_books(
    db: Session,
    author: str | None = None,
    genre: str | None = None,
) -> list[Book]:
    """
    List books with their authors and genres loaded.

    Args:
        author: Only books by the author with this name (surrounding
            whitespace ignored, as when the author was stored)
        genre: Only books listing this genre

    Returns:
        Books in id order, so a filtered list keeps the relative order of
        the unfiltered one
    """
    stmt = (
        select(Book)
        .options(selectinload(Book.author), selectinload(Book.genre_links))
        .order_by(Book.id)
    )

    if author:
        stmt = stmt.where(Book.author.has(Author.name == author.strip()))

    if genre:
        stmt = stmt.where(Book.genre_links.any(BookGenre.genre.has(Genre.name == genre)))

    return list(db.execute(stmt).scalars().all())


def count_books(db: Session) -> int:
    return db.execute(select(func.count()).select_from(Book)).scalar_one()
