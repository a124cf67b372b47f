"""
pytest Fixtures for Library API Tests

This file contains shared fixtures used across all test files.

FIXTURE SCOPES:
- session scope for the engine (expensive to create)
- function scope for sessions (isolation between tests)

Every test runs inside a transaction that is rolled back afterwards, so
tests never see each other's data.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_CONNECT_RETRY_DELAY"] = "0"
os.environ["LOGIN_SHARED_PASSWORD"] = "secret"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import Author, Book, User
from app.services import library
from app.services.security import hash_password
from tests.helpers import make_token

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory: fast, isolated, no external database needed.


@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the single connection alive for the entire session.
    Without it, the in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is wrapped in a transaction that's rolled back,
    ensuring test isolation without needing to recreate tables.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def committed_session() -> Generator[Session, None, None]:
    """
    A session on its own in-memory database whose commits and rollbacks
    are real.

    db_session joins an outer transaction, so a rollback inside a service
    would discard the whole test's data. Tests that need a write to fail
    on a unique constraint and recover use this session instead.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency, which the GraphQL context getter
    depends on, to use our test session.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    author = Author(name="Robert Martin", born=1952)
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """Create a sample book by sample_author."""
    return library.create_book(
        db_session,
        title="Clean Code",
        published=2008,
        genres=["refactoring"],
        author=sample_author,
    )


@pytest.fixture
def library_books(db_session: Session) -> list[Book]:
    """
    Create a small library with overlapping genres.

    Books are created in this order:
    1. Clean Code (refactoring)
    2. The Hobbit (fantasy, classic)
    3. Crime and punishment (classic, crime)
    4. The Fellowship of the Ring (fantasy)
    """
    martin = library.create_author(db_session, "Robert Martin", born=1952)
    tolkien = library.create_author(db_session, "J.R.R. Tolkien", born=1892)
    dostoevsky = library.create_author(db_session, "Fyodor Dostoevsky", born=1821)

    books_data = [
        ("Clean Code", 2008, ["refactoring"], martin),
        ("The Hobbit", 1937, ["fantasy", "classic"], tolkien),
        ("Crime and punishment", 1866, ["classic", "crime"], dostoevsky),
        ("The Fellowship of the Ring", 1954, ["fantasy"], tolkien),
    ]
    return [
        library.create_book(db_session, title, published, genres, author)
        for title, published, genres, author in books_data
    ]


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a user without a personal password (uses the shared password)."""
    user = User(username="mluukkai", favourite_genre="refactoring")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def password_user(db_session: Session) -> User:
    """Create a user with a personal password."""
    user = User(
        username="hellas",
        favourite_genre="crime",
        hashed_password=hash_password("SecurePass123"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_token(sample_user: User) -> str:
    """A valid bearer token for sample_user."""
    return make_token(sample_user)
