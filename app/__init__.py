"""
Library GraphQL API Application Package

A GraphQL server for a library of authors and books, with user creation
and token login.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection aliases
- graphql/: Strawberry schema, resolvers and request context
- models/: SQLAlchemy ORM models
- schemas/: Pydantic input validation schemas
- services/: Business logic (library, users, tokens)
"""

__version__ = "1.0.0"
