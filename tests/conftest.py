"""
pytest Fixtures for Library Catalog API Tests

This file contains shared fixtures used across all test files.

For database tests, every test gets its own SQLite in-memory database:
- engine: fresh in-memory database with all tables created
- db_session: session on that database, shared with the app under test
- client: FastAPI TestClient whose get_db dependency yields db_session

Rollback-based isolation doesn't fit here: resolvers commit and roll back
on constraint violations themselves, so each test starts from a new
database instead.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from library_api.database import Base, get_db
from library_api.main import app
from library_api.models import Author, Book, User
from library_api.services import catalog
from library_api.services.security import create_user_token

# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def engine():
    """
    Create a SQLite in-memory database engine with all tables.

    StaticPool keeps the single connection alive for the whole test;
    without it the in-memory database would disappear between connections.
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
    """Create a database session on the test engine."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency, which the GraphQL context getter
    declares, to use our test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author without books."""
    author = Author(name="Sandi Metz")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_books(db_session: Session) -> list[Book]:
    """
    Create a small catalog through the catalog service.

    Robert Martin has two books, the other authors one each.
    """
    books_data = [
        ("Clean Code", "Robert Martin", 2008, ["refactoring"]),
        ("Agile software development", "Robert Martin", 2002, ["agile", "patterns", "design"]),
        ("Refactoring to patterns", "Joshua Kerievsky", 2008, ["refactoring", "patterns"]),
        ("Demons", "Fyodor Dostoevsky", 1872, ["classic", "revolution"]),
    ]
    return [
        catalog.add_book(
            db_session,
            title=title,
            author_name=author,
            published=published,
            genres=genres,
        )
        for title, author, published, genres in books_data
    ]


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a sample user for testing."""
    user = User(username="alice", favorite_genre="Fantasy")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_token(sample_user: User) -> str:
    """Bearer token for sample_user."""
    return create_user_token(sample_user.id, sample_user.username)
