"""
GraphQL Query Resolvers

Defines all read operations (queries) for the GraphQL API.
Each resolver fetches data through the library and user services using
the session from the context.
"""

import strawberry
from sqlalchemy.orm import Session
from strawberry.types import Info

from app.graphql.context import GraphQLContext
from app.graphql.types.author import AuthorType
from app.graphql.types.book import BookType
from app.graphql.types.user import UserType
from app.models import Author, Book, User
from app.services import library


def author_to_graphql(author: Author, book_count: int) -> AuthorType:
    """Convert SQLAlchemy Author model to GraphQL AuthorType."""
    return AuthorType(
        id=strawberry.ID(str(author.id)),
        name=author.name,
        born=author.born,
        book_count=book_count,
    )


def book_to_graphql(book: Book, book_counts: dict[int, int]) -> BookType:
    """
    Convert SQLAlchemy Book model to GraphQL BookType.

    Args:
        book_counts: Books per author id, used for the nested author's bookCount
    """
    return BookType(
        id=strawberry.ID(str(book.id)),
        title=book.title,
        published=book.published,
        genres=book.genres,
        author=author_to_graphql(book.author, book_counts.get(book.author_id, 0)),
    )


def books_to_graphql(db: Session, books: list[Book]) -> list[BookType]:
    """Convert a list of books, counting their authors' books in one query."""
    author_ids = list({book.author_id for book in books})
    book_counts = library.count_books_by_author(db, author_ids) if author_ids else {}
    return [book_to_graphql(book, book_counts) for book in books]


def user_to_graphql(user: User) -> UserType:
    """Convert SQLAlchemy User model to GraphQL UserType."""
    return UserType(
        id=strawberry.ID(str(user.id)),
        username=user.username,
        favourite_genre=user.favourite_genre,
    )


@strawberry.type
class Query:
    """
    GraphQL Query type containing all read operations.

    All resolvers receive an `info` parameter that contains the
    GraphQL context with database session and current user.
    """

    @strawberry.field(description="Number of books in the library")
    def book_count(self, info: Info[GraphQLContext, None]) -> int:
        return library.count_books(info.context.db)

    @strawberry.field(description="Number of authors in the library")
    def author_count(self, info: Info[GraphQLContext, None]) -> int:
        return library.count_authors(info.context.db)

    @strawberry.field(description="List books, optionally filtered by author name and genre")
    def all_books(
        self,
        info: Info[GraphQLContext, None],
        author: str | None = None,
        genre: str | None = None,
    ) -> list[BookType]:
        """
        Get books with optional filtering.

        Args:
            author: Only books by the author with this name
            genre: Only books that list this genre

        Returns:
            Matching books in insertion order, each with its author
        """
        db = info.context.db
        books = library.list_books(db, author=author, genre=genre)
        return books_to_graphql(db, books)

    @strawberry.field(description="List all authors with their book counts")
    def all_authors(self, info: Info[GraphQLContext, None]) -> list[AuthorType]:
        db = info.context.db
        authors = library.list_authors(db)
        book_counts = library.count_books_by_author(db)
        return [author_to_graphql(a, book_counts.get(a.id, 0)) for a in authors]

    @strawberry.field(description="Get the currently authenticated user")
    def me(self, info: Info[GraphQLContext, None]) -> UserType | None:
        """
        Get the current user.

        Returns None when the request is anonymous.
        """
        user = info.context.current_user
        if user is None:
            return None
        return user_to_graphql(user)
