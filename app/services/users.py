"""
User Service

Creating users and checking login credentials.

Login policy:
- a user created with a password must present that password
  (checked against the stored bcrypt hash)
- a user created without one must present the server's shared login
  password (LOGIN_SHARED_PASSWORD)
"""

import logging
import secrets

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import User
from app.schemas import UserCreate
from app.services.errors import ValidationError
from app.services.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def find_user_by_username(db: Session, username: str) -> User | None:
    stmt = select(User).where(User.username == username)
    return db.execute(stmt).scalar_one_or_none()


def create_user(
    db: Session,
    username: str,
    favourite_genre: str,
    password: str | None = None,
) -> User:
    """
    Create a user.

    Raises:
        ValidationError: If a field is invalid or the username is taken
    """
    try:
        data = UserCreate(
            username=username,
            favourite_genre=favourite_genre,
            password=password,
        )
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc

    if find_user_by_username(db, data.username) is not None:
        raise ValidationError("username", f"Username '{data.username}' is already taken")

    user = User(
        username=data.username,
        favourite_genre=data.favourite_genre,
        hashed_password=hash_password(data.password) if data.password else None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationError("username", f"Username '{data.username}' is already taken") from e

    db.refresh(user)
    logger.info(f"Created user {user.id} '{user.username}'")
    return user


def authenticate(
    db: Session,
    username: str,
    password: str,
    shared_password: str,
) -> User | None:
    """
    Check a username/password pair.

    Returns:
        The user if the credentials are valid, None otherwise
    """
    user = find_user_by_username(db, username)
    if user is None:
        return None

    if user.hashed_password:
        valid = verify_password(password, user.hashed_password)
    else:
        valid = secrets.compare_digest(password.encode(), shared_password.encode())

    return user if valid else None
