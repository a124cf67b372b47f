"""
Services Package

This package contains business logic services that are:
- Separate from GraphQL handling (resolvers)
- Reusable across different parts of the application
- Easier to test in isolation

Current services:
- errors.py: Exceptions raised by the service layer
- library.py: Authors and books (lookups, creation, filtering, counts)
- security.py: Password hashing and login tokens
- users.py: User creation and credential checks
"""
