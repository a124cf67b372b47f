"""
GraphQL Context

Provides request context to all GraphQL resolvers:
- Database session for queries
- The identity of the caller (anonymous or an authenticated user)

The context is created fresh for each GraphQL request and passed
to all resolvers via the `info` parameter.

Identity resolution
===================
1. Read the Authorization header.
2. If it starts with "Bearer " (any case), verify the rest as a token.
3. Load the user whose id the token carries.

Anything that goes wrong along the way (no header, another scheme, a bad
or expired token, a deleted user) leaves the caller anonymous. A rejected
token is logged, never raised: mutations that need a user then fail with
UNAUTHENTICATED.
"""

import logging
from dataclasses import dataclass
from typing import Union

from fastapi import Request
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from app.dependencies import DbSession, Tokens
from app.models import User
from app.services.errors import InvalidCredentialError
from app.services.security import TokenService
from app.services.users import get_user

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


@dataclass(frozen=True)
class Anonymous:
    """No user is attached to the request."""


@dataclass(frozen=True)
class Authenticated:
    """The request carries a valid token for ``user``."""

    user: User


Identity = Union[Anonymous, Authenticated]


class GraphQLContext(BaseContext):
    """
    Context object available to all GraphQL resolvers.

    Attributes:
        db: SQLAlchemy database session
        identity: Anonymous() or Authenticated(user)
        tokens: Token service used to issue login tokens
    """

    def __init__(self, db: Session, identity: Identity, tokens: TokenService):
        super().__init__()
        self.db = db
        self.identity = identity
        self.tokens = tokens

    @property
    def current_user(self) -> User | None:
        """The authenticated user, or None for anonymous requests."""
        if isinstance(self.identity, Authenticated):
            return self.identity.user
        return None


def resolve_identity(
    db: Session,
    tokens: TokenService,
    authorization: str | None,
) -> Identity:
    """
    Work out who is making the request from its Authorization header.

    Args:
        db: Database session used to load the user
        tokens: Service that verifies the token
        authorization: Raw Authorization header value (may be None)

    Returns:
        Authenticated(user) for a valid token of an existing user,
        Anonymous() otherwise
    """
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return Anonymous()

    token = authorization[len(BEARER_PREFIX):].strip()

    try:
        claims = tokens.verify(token)
    except InvalidCredentialError as e:
        logger.warning(f"Rejected bearer token: {e}")
        return Anonymous()

    try:
        user_id = int(claims["id"])
    except (KeyError, TypeError, ValueError):
        logger.warning("Rejected bearer token: no usable user id in claims")
        return Anonymous()

    user = get_user(db, user_id)
    if user is None:
        logger.warning(f"Bearer token refers to unknown user {user_id}")
        return Anonymous()

    return Authenticated(user=user)


async def get_context(
    request: Request,
    db: DbSession,
    tokens: Tokens,
) -> GraphQLContext:
    """
    Create GraphQL context for each request.

    Strawberry calls this for every GraphQL request. Its parameters are
    FastAPI dependencies, so the session and token service can be
    overridden in tests with app.dependency_overrides.
    """
    identity = resolve_identity(db, tokens, request.headers.get("Authorization"))
    return GraphQLContext(db=db, identity=identity, tokens=tokens)
