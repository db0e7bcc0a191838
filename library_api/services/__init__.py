"""
Services Package

This package contains business logic services that are:
- Separate from GraphQL handling (resolvers)
- Reusable across different parts of the application
- Easier to test in isolation

Current services:
- catalog.py: Book, author and user data operations
- events.py: In-process publish/subscribe for GraphQL subscriptions
- security.py: JWT issue and verification
"""
