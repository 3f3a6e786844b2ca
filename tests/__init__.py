"""
Test Suite for Book Catalog API

Test Organization:
- conftest.py: Shared fixtures (per-test database, both stores, client)
- test_store.py: CatalogStore contract, run against SQL and memory stores
- test_catalog_service.py: allBooks filters, addBook/editAuthor rules
- test_accounts.py: createUser, login and the bearer-token guard
- test_security.py: Password hashing and JWT helpers
- test_pubsub.py / test_events.py: Notification hub and bookAdded stream
- test_graphql.py: End-to-end GraphQL over HTTP and WebSocket
- test_config.py: Settings validation

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_catalog_service.py

    # Run with verbose output
    pytest -v
"""
