"""
Library Catalog API Package

GraphQL backend for a small library catalog: books, authors and users,
with authenticated mutations and a book-added subscription.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- main.py: FastAPI application factory and configuration
- models/: SQLAlchemy ORM models
- services/: Catalog operations, token handling, change notifier
- graphql/: Strawberry schema, context and resolvers
"""

__version__ = "0.1.0"
