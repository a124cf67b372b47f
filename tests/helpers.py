"""Helpers shared by the GraphQL test modules."""

from fastapi.testclient import TestClient

from app.models import User
from app.services.security import get_token_service


def graphql_query(
    client: TestClient,
    query: str,
    variables: dict | None = None,
    token: str | None = None,
    authorization: str | None = None,
) -> dict:
    """Execute a GraphQL query and return the decoded response body."""
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if authorization:
        headers["Authorization"] = authorization

    payload = {"query": query}
    if variables:
        payload["variables"] = variables

    response = client.post("/graphql", json=payload, headers=headers)
    assert response.status_code == 200
    return response.json()


def make_token(user: User) -> str:
    """Issue a login token for a user, as the login mutation would."""
    return get_token_service().issue({"username": user.username, "id": str(user.id)})
