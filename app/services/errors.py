"""
Service Errors

Exceptions raised by the service layer. They know nothing about GraphQL;
the resolvers translate them into GraphQL errors with error codes.
"""

from pydantic import ValidationError as PydanticValidationError


class ValidationError(Exception):
    """
    Raised when data cannot be stored.

    Covers both schema validation failures and database constraint
    violations. ``field`` names the input that was rejected.
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        """Build from the first error reported by a Pydantic schema."""
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error.get("loc") else "input"
        return cls(field, f"{field}: {error['msg']}")


class InvalidCredentialError(Exception):
    """Raised when a token is malformed, tampered with or expired."""

    pass
