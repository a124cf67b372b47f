"""
GraphQL Package

This package provides the GraphQL API using Strawberry GraphQL.

Features:
- Authors and books with genre and author-name filtering
- Computed per-author book counts
- User creation and token login
- Authentication via bearer token in context

Usage:
    The GraphQL endpoint is available at /graphql with an
    interactive GraphiQL IDE for development.

Example Query:
    query {
        allBooks(genre: "refactoring") {
            title
            published
            author { name bookCount }
        }
    }
"""

import strawberry
from strawberry.fastapi import GraphQLRouter

from app.config import get_settings
from app.graphql.context import get_context
from app.graphql.mutations import Mutation
from app.graphql.queries import Query

# Create the GraphQL schema
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
)


def create_graphql_router() -> GraphQLRouter:
    """
    Create the GraphQL router for FastAPI.

    Returns:
        GraphQLRouter configured with schema and context
    """
    settings = get_settings()
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.graphql_ide_enabled else None,
    )


__all__ = ["schema", "create_graphql_router"]
