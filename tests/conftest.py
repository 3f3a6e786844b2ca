"""
pytest Fixtures for Book Catalog Tests

This file contains shared fixtures used across all test files.

WHAT ARE FIXTURES?
==================
Fixtures are reusable test setup/teardown functions.
They provide:
- Test resources (database engine, stores, HTTP clients)
- Test data (a logged-in user, the demo catalog)
- Setup/cleanup logic (create/drop tables)

For database tests, we use:
- function scope for the engine: the store commits for real, so every
  test gets its own in-memory database instead of a rolled-back
  transaction
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORE_BACKEND"] = "sql"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "60"
os.environ["LOG_LEVEL"] = "WARNING"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookcatalog.database import Base
from bookcatalog.dependencies import get_store
from bookcatalog.main import app
from bookcatalog.schemas import BookRead, UserRead
from bookcatalog.services import AccountService, CatalogService
from bookcatalog.services.pubsub import NotificationHub
from bookcatalog.store import CatalogStore, MemoryCatalogStore, SqlCatalogStore

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# We use SQLite in-memory for tests because:
# - Fast: No disk I/O, runs in memory
# - Isolated: Each test starts fresh
# - Simple: No external database needed
#
# SQLite enforces the same unique and CHECK constraints as PostgreSQL.
# It does not enforce foreign keys by default.


@pytest.fixture
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps one connection alive for the whole test.
    Without it, SQLite in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Create a database session bound to the per-test engine."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


# =============================================================================
# STORE FIXTURES
# =============================================================================


@pytest.fixture
def sql_store(db_session: Session) -> SqlCatalogStore:
    return SqlCatalogStore(db_session)


@pytest.fixture
def memory_store() -> MemoryCatalogStore:
    return MemoryCatalogStore()


@pytest.fixture(params=["sql", "memory"])
def store(request) -> CatalogStore:
    """
    Run the requesting test once per store implementation.

    Both stores must behave identically for the service layer.
    """
    return request.getfixturevalue(f"{request.param}_store")


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


class RecordingSink:
    """BookEventSink that remembers every announced book."""

    def __init__(self):
        self.books: list[BookRead] = []

    def book_added(self, book: BookRead) -> None:
        self.books.append(book)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def hub() -> NotificationHub:
    """A private hub, so tests never see each other's subscribers."""
    return NotificationHub()


@pytest.fixture
def catalog(store: CatalogStore, sink: RecordingSink) -> CatalogService:
    return CatalogService(store, sink)


@pytest.fixture
def accounts(store: CatalogStore) -> AccountService:
    return AccountService(store)


@pytest.fixture
def user(accounts: AccountService) -> UserRead:
    """A registered user to run authenticated mutations as."""
    return accounts.create_user("mluukkai", favorite_genre="refactoring")


# =============================================================================
# HTTP CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def client(sql_store: SqlCatalogStore) -> Generator[TestClient, None, None]:
    """
    Create a test client backed by the per-test SQL store.

    We override the get_store dependency so every request (and the
    subscription context) sees the test database.
    """

    def override_get_store():
        yield sql_store

    app.dependency_overrides[get_store] = override_get_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def pooled_engine(tmp_path):
    """
    A file-backed SQLite engine with a real connection pool.

    Used where the HTTP and WebSocket sides must not share a session.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'catalog.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    engine.dispose()


@pytest.fixture
def pooled_client(pooled_engine) -> Generator[TestClient, None, None]:
    """Test client with one session per connection, like get_db."""
    SessionFactory = sessionmaker(autocommit=False, autoflush=False, bind=pooled_engine)

    def override_get_store():
        db = SessionFactory()
        try:
            yield SqlCatalogStore(db)
        finally:
            db.close()

    app.dependency_overrides[get_store] = override_get_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_token(sql_store: SqlCatalogStore) -> str:
    """Register a user in the client's store and log in."""
    accounts = AccountService(sql_store)
    accounts.create_user("mluukkai", favorite_genre="refactoring")
    return accounts.login("mluukkai", "secret")


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {auth_token}"}
