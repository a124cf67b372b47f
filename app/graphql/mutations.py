"""
GraphQL Mutation Resolvers

Defines all write operations (mutations) for the GraphQL API.

addBook and editAuthor require an authenticated user: the check runs
before anything is read or written, so an anonymous call has no side
effects. createUser and login are open.
"""

import logging

import strawberry
from strawberry.types import Info

from app.config import get_settings
from app.graphql.context import GraphQLContext
from app.graphql.errors import (
    InvalidCredentialsError,
    InvalidInputError,
    UnauthenticatedError,
)
from app.graphql.queries import author_to_graphql, books_to_graphql, user_to_graphql
from app.graphql.types.author import AuthorType
from app.graphql.types.book import BookType
from app.graphql.types.user import TokenType, UserType
from app.models import User
from app.services import library, users
from app.services.errors import ValidationError

logger = logging.getLogger(__name__)


def require_auth(info: Info[GraphQLContext, None]) -> User:
    """Helper to require authentication and return the user."""
    user = info.context.current_user
    if user is None:
        raise UnauthenticatedError()
    return user


# =============================================================================
# Mutation Type
# =============================================================================


@strawberry.type
class Mutation:
    """
    GraphQL Mutation type containing all write operations.
    """

    # =========================================================================
    # Library Mutations
    # =========================================================================

    @strawberry.mutation(description="Add a book, creating its author if needed")
    def add_book(
        self,
        info: Info[GraphQLContext, None],
        title: str,
        author: str,
        published: int,
        genres: list[str],
    ) -> BookType | None:
        """
        Add a new book.

        Requires authentication. The author is looked up by name and
        created first when it does not exist yet.
        """
        user = require_auth(info)
        db = info.context.db
        args = {"title": title, "published": published, "genres": genres}

        # Reject bad book fields before an author row can be created
        try:
            library.validate_book(title, published, genres)
        except ValidationError as e:
            raise InvalidInputError.from_validation(
                e, invalid_args=args.get(e.field, title)
            ) from e

        try:
            book_author = library.get_or_create_author(db, author)
        except ValidationError as e:
            raise InvalidInputError(e.message, field="author", invalid_args=author) from e

        try:
            book = library.create_book(
                db,
                title=title,
                published=published,
                genres=genres,
                author=book_author,
            )
        except ValidationError as e:
            raise InvalidInputError.from_validation(
                e, invalid_args=args.get(e.field, title)
            ) from e

        logger.info(f"User '{user.username}' added book {book.id}")
        return books_to_graphql(db, [book])[0]

    @strawberry.mutation(description="Set an author's birth year")
    def edit_author(
        self,
        info: Info[GraphQLContext, None],
        name: str,
        set_born_to: int,
    ) -> AuthorType | None:
        """
        Update an author's birth year.

        Requires authentication. Returns None if no author has that name.
        """
        require_auth(info)
        db = info.context.db

        try:
            author = library.set_author_born(db, name, set_born_to)
        except ValidationError as e:
            raise InvalidInputError(
                e.message,
                field="setBornTo",
                invalid_args={"name": name, "setBornTo": set_born_to},
            ) from e

        if author is None:
            return None

        book_counts = library.count_books_by_author(db, [author.id])
        return author_to_graphql(author, book_counts.get(author.id, 0))

    # =========================================================================
    # User Mutations
    # =========================================================================

    @strawberry.mutation(description="Create a user account")
    def create_user(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        favourite_genre: str,
        password: str | None = None,
    ) -> UserType | None:
        """
        Create a new user.

        Without a password the user logs in with the shared login password.
        """
        try:
            user = users.create_user(
                info.context.db,
                username=username,
                favourite_genre=favourite_genre,
                password=password,
            )
        except ValidationError as e:
            raise InvalidInputError.from_validation(
                e,
                invalid_args={"username": username, "favouriteGenre": favourite_genre},
            ) from e

        return user_to_graphql(user)

    @strawberry.mutation(description="Log in and receive a bearer token")
    def login(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        password: str,
    ) -> TokenType | None:
        """
        Authenticate with username and password.

        The returned token embeds the username and user id.
        """
        user = users.authenticate(
            info.context.db,
            username=username,
            password=password,
            shared_password=get_settings().login_shared_password,
        )

        if user is None:
            logger.info(f"Failed login for username '{username}'")
            raise InvalidCredentialsError()

        token = info.context.tokens.issue({"username": user.username, "id": str(user.id)})
        return TokenType(value=token)
