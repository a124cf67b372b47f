"""
Tests for the library and user services.

These call the service functions directly with the test session, without
going through GraphQL.
"""

from datetime import date
from unittest.mock import patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models import Author, Book, Genre, User
from app.services import library, users
from app.services.errors import ValidationError


class TestAuthors:
    """Tests for author lookups and creation."""

    def test_create_author_strips_name(self, db_session: Session):
        author = library.create_author(db_session, "  Sandi Metz  ")

        assert author.id is not None
        assert author.name == "Sandi Metz"
        assert author.born is None

    def test_create_author_returns_existing(self, db_session: Session, sample_author: Author):
        """Test a duplicate name reuses the stored author."""
        author = library.create_author(db_session, "Robert Martin")

        assert author.id == sample_author.id
        assert library.count_authors(db_session) == 1

    @pytest.mark.parametrize("name", ["", "   "])
    def test_create_author_blank_name(self, db_session: Session, name: str):
        with pytest.raises(ValidationError) as exc_info:
            library.create_author(db_session, name)

        assert exc_info.value.field == "name"
        assert library.count_authors(db_session) == 0

    def test_find_author_by_name(self, db_session: Session, sample_author: Author):
        assert library.find_author_by_name(db_session, "Robert Martin") is sample_author
        assert library.find_author_by_name(db_session, "Martin Fowler") is None

    def test_get_or_create_author(self, db_session: Session, sample_author: Author):
        existing = library.get_or_create_author(db_session, "Robert Martin")
        created = library.get_or_create_author(db_session, "Martin Fowler")

        assert existing.id == sample_author.id
        assert created.id != sample_author.id
        assert library.count_authors(db_session) == 2

    def test_set_author_born_updates_same_row(
        self, db_session: Session, sample_author: Author
    ):
        """Test the stored row is updated, not replaced."""
        author = library.set_author_born(db_session, "Robert Martin", 1958)

        assert author.id == sample_author.id
        db_session.expire_all()
        assert db_session.get(Author, sample_author.id).born == 1958
        assert library.count_authors(db_session) == 1

    def test_set_author_born_unknown_author(self, db_session: Session):
        assert library.set_author_born(db_session, "Nobody", 1958) is None

    def test_set_author_born_out_of_range(self, db_session: Session, sample_author: Author):
        with pytest.raises(ValidationError) as exc_info:
            library.set_author_born(db_session, "Robert Martin", 99999)

        assert exc_info.value.field == "born"


class TestBooks:
    """Tests for book creation, listing and counting."""

    def test_create_book(self, db_session: Session, sample_author: Author):
        book = library.create_book(
            db_session,
            title="Clean Architecture",
            published=2017,
            genres=["design", "architecture"],
            author=sample_author,
        )

        assert book.id is not None
        assert book.author_id == sample_author.id
        assert book.genres == ["design", "architecture"]

    def test_genre_order_is_kept(self, db_session: Session, sample_author: Author):
        book = library.create_book(
            db_session,
            title="Agile software development",
            published=2002,
            genres=["patterns", "agile", "design"],
            author=sample_author,
        )

        db_session.expire_all()
        assert db_session.get(Book, book.id).genres == ["patterns", "agile", "design"]

    def test_genres_are_shared_between_books(
        self, db_session: Session, library_books: list[Book]
    ):
        """Test two books listing the same genre are both found by it."""
        books = library.list_books(db_session, genre="classic")

        assert [b.title for b in books] == ["The Hobbit", "Crime and punishment"]

    @pytest.mark.parametrize(
        "title,published,genres,field",
        [
            ("", 2008, [], "title"),
            ("Clean Code", 3000, [], "published"),
            ("Clean Code", 2008, ["refactoring", " "], "genres"),
        ],
    )
    def test_create_book_invalid(
        self,
        db_session: Session,
        sample_author: Author,
        title: str,
        published: int,
        genres: list[str],
        field: str,
    ):
        with pytest.raises(ValidationError) as exc_info:
            library.create_book(db_session, title, published, genres, sample_author)

        assert exc_info.value.field == field
        assert library.count_books(db_session) == 0

    def test_list_books_joins_author(self, db_session: Session, library_books: list[Book]):
        books = library.list_books(db_session)

        assert [b.id for b in books] == [b.id for b in library_books]
        assert books[0].author.name == "Robert Martin"

    def test_list_books_filters(self, db_session: Session, library_books: list[Book]):
        assert [b.title for b in library.list_books(db_session, genre="crime")] == [
            "Crime and punishment"
        ]
        assert [b.title for b in library.list_books(db_session, author="Robert Martin")] == [
            "Clean Code"
        ]
        assert library.list_books(db_session, author="Nobody") == []

    def test_list_books_author_filter_ignores_whitespace(
        self, db_session: Session, library_books: list[Book]
    ):
        books = library.list_books(db_session, author="  Robert Martin ")

        assert [b.title for b in books] == ["Clean Code"]

    def test_create_book_announced_edition(self, db_session: Session, sample_author: Author):
        """Test a publication year after the current one is accepted."""
        next_year = date.today().year + 1

        book = library.create_book(
            db_session, "Clean Code, 2nd edition", next_year, ["refactoring"], sample_author
        )

        assert book.published == next_year

    def test_counts(self, db_session: Session, library_books: list[Book]):
        assert library.count_books(db_session) == 4
        assert library.count_authors(db_session) == 3

    def test_count_books_by_author(self, db_session: Session, library_books: list[Book]):
        tolkien = library.find_author_by_name(db_session, "J.R.R. Tolkien")
        martin = library.find_author_by_name(db_session, "Robert Martin")

        counts = library.count_books_by_author(db_session)
        assert counts[tolkien.id] == 2
        assert counts[martin.id] == 1

        assert library.count_books_by_author(db_session, [tolkien.id]) == {tolkien.id: 2}


class TestUsers:
    """Tests for user creation and authentication."""

    def test_create_user_without_password(self, db_session: Session):
        user = users.create_user(db_session, "alice", "fantasy")

        assert user.id is not None
        assert user.hashed_password is None

    def test_create_user_with_password(self, db_session: Session):
        user = users.create_user(db_session, "alice", "fantasy", password="SecurePass123")

        assert user.hashed_password is not None
        assert user.hashed_password != "SecurePass123"

    def test_create_user_duplicate(self, db_session: Session, sample_user):
        with pytest.raises(ValidationError) as exc_info:
            users.create_user(db_session, "mluukkai", "crime")

        assert exc_info.value.field == "username"

    def test_create_user_short_password(self, db_session: Session):
        with pytest.raises(ValidationError) as exc_info:
            users.create_user(db_session, "alice", "fantasy", password="short")

        assert exc_info.value.field == "password"

    def test_authenticate_shared_password(self, db_session: Session, sample_user):
        assert users.authenticate(db_session, "mluukkai", "secret", "secret") is sample_user
        assert users.authenticate(db_session, "mluukkai", "wrong", "secret") is None

    def test_authenticate_personal_password(self, db_session: Session, password_user):
        assert (
            users.authenticate(db_session, "hellas", "SecurePass123", "secret")
            is password_user
        )
        assert users.authenticate(db_session, "hellas", "secret", "secret") is None

    def test_authenticate_unknown_user(self, db_session: Session):
        assert users.authenticate(db_session, "nobody", "secret", "secret") is None


# =============================================================================
# Concurrent inserts
# =============================================================================
# A request that wins the race is simulated by committing the row first and
# hiding it from the service's initial lookup, so the service's own insert
# hits the unique constraint.


def count_rows(db: Session, model) -> int:
    return db.execute(select(func.count()).select_from(model)).scalar_one()


def miss_first_call(real):
    """Wrap a lookup so its first call finds nothing."""
    calls = []

    def lookup(*args, **kwargs):
        calls.append(args)
        if len(calls) == 1:
            return None
        return real(*args, **kwargs)

    return lookup


def new_genre_rows(db: Session, names: list[str]) -> list[Genre]:
    """Insert every genre as a new row, ignoring the ones already stored."""
    return [Genre(name=name) for name in names]


class TestConcurrentInserts:
    """Tests for unique-constraint collisions on commit."""

    def test_create_author_reuses_concurrent_row(self, committed_session: Session):
        winner = Author(name="Sandi Metz", born=1952)
        committed_session.add(winner)
        committed_session.commit()
        winner_id = winner.id

        lookup = miss_first_call(library.find_author_by_name)
        with patch.object(library, "find_author_by_name", side_effect=lookup) as mock_find:
            author = library.create_author(committed_session, "Sandi Metz")

        assert mock_find.call_count == 2
        assert author.id == winner_id
        assert author.born == 1952
        assert count_rows(committed_session, Author) == 1

    def test_create_user_concurrent_duplicate(self, committed_session: Session):
        committed_session.add(User(username="mluukkai", favourite_genre="refactoring"))
        committed_session.commit()

        with patch.object(users, "find_user_by_username", return_value=None):
            with pytest.raises(ValidationError) as exc_info:
                users.create_user(committed_session, "mluukkai", "crime")

        assert exc_info.value.field == "username"
        assert count_rows(committed_session, User) == 1

    def test_create_book_retries_after_concurrent_genre(self, committed_session: Session):
        author = Author(name="J.R.R. Tolkien", born=1892)
        committed_session.add_all([author, Genre(name="fantasy")])
        committed_session.commit()

        real_genres = library._get_or_create_genres
        attempts = iter([new_genre_rows, real_genres])

        def genres_lookup(db, names):
            return next(attempts)(db, names)

        with patch.object(library, "_get_or_create_genres", side_effect=genres_lookup):
            book = library.create_book(
                committed_session, "The Hobbit", 1937, ["fantasy", "classic"], author
            )

        assert book.id is not None
        assert book.genres == ["fantasy", "classic"]
        assert count_rows(committed_session, Book) == 1
        assert count_rows(committed_session, Genre) == 2

    def test_create_book_genre_collision_twice(self, committed_session: Session):
        author = Author(name="J.R.R. Tolkien", born=1892)
        committed_session.add_all([author, Genre(name="fantasy")])
        committed_session.commit()

        with patch.object(library, "_get_or_create_genres", side_effect=new_genre_rows):
            with pytest.raises(ValidationError) as exc_info:
                library.create_book(committed_session, "The Hobbit", 1937, ["fantasy"], author)

        assert exc_info.value.field == "genres"
        assert count_rows(committed_session, Book) == 0
        assert count_rows(committed_session, Genre) == 1
