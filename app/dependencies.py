"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers and
into the GraphQL context getter. FastAPI's Depends() manages their
lifecycle, and tests replace them through app.dependency_overrides.

Instead of writing:
    def handler(db: Session = Depends(get_db)):

You can write:
    def handler(db: DbSession):
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.security import TokenService, get_token_service

DbSession = Annotated[Session, Depends(get_db)]

Tokens = Annotated[TokenService, Depends(get_token_service)]
