"""
Test Suite for the Library GraphQL API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- helpers.py: GraphQL request and token helpers
- test_graphql.py: Queries and mutations through /graphql
- test_library.py: Author, book and user services
- test_context.py: Identity resolution from the Authorization header
- test_security.py: Password hashing, tokens and secret key settings

Running Tests:
    pytest
    pytest tests/test_graphql.py -v
"""
