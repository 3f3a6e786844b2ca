"""
Book Catalog API Package

A GraphQL service for a catalog of books and authors.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- errors.py: Error kinds returned to API clients
- models/: SQLAlchemy ORM models
- schemas/: Pydantic read models passed between layers
- store/: Catalog store interface with SQL and in-memory implementations
- services/: Business logic (catalog rules, accounts, notifications)
- graphql/: Strawberry schema, resolvers and context
"""

__version__ = "0.1.0"
