"""
GraphQL Errors

Errors raised by resolvers. Each one carries a machine-readable
``extensions.code`` so clients can tell failures apart without parsing
messages:

    {
        "message": "User not logged in",
        "extensions": {"code": "UNAUTHENTICATED"}
    }
"""

from typing import Any

from graphql import GraphQLError

from app.services.errors import ValidationError


class UnauthenticatedError(GraphQLError):
    """Raised when a mutation needs a logged-in user and there is none."""

    def __init__(self, message: str = "User not logged in"):
        super().__init__(message, extensions={"code": "UNAUTHENTICATED"})


class InvalidCredentialsError(GraphQLError):
    """Raised when login is attempted with a wrong username or password."""

    def __init__(self, message: str = "wrong credentials"):
        super().__init__(message, extensions={"code": "INVALID_CREDENTIALS"})


class InvalidInputError(GraphQLError):
    """
    Raised when mutation input is rejected.

    ``field`` names the argument that was rejected and ``invalid_args``
    echoes the value(s) that caused it.
    """

    def __init__(self, message: str, field: str, invalid_args: Any = None):
        super().__init__(
            message,
            extensions={
                "code": "BAD_USER_INPUT",
                "field": field,
                "invalidArgs": invalid_args,
            },
        )
        self.field = field

    @classmethod
    def from_validation(
        cls,
        exc: ValidationError,
        invalid_args: Any = None,
    ) -> "InvalidInputError":
        return cls(exc.message, field=exc.field, invalid_args=invalid_args)
