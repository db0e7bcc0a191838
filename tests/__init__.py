"""
Test Suite for the Library Catalog API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_auth_context.py: Bearer token to user resolution
- test_queries.py / test_mutations.py: GraphQL operations over HTTP
- test_subscriptions.py: bookAdded delivery
- test_catalog.py: Catalog service, including author dedup
- test_events.py: Publish/subscribe hub
- test_scenario.py: End-to-end flow
- test_security.py: Tokens and settings validation
- test_migrations.py: Alembic migrations on SQLite

Running Tests:
    pip install -e ".[test]"
    pytest
    pytest tests/test_mutations.py -v
"""
