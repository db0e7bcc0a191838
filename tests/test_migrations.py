"""
Migration Tests

Applies the Alembic migrations to a fresh SQLite file and checks the
resulting schema matches what the models expect.
"""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError

from library_api.config import get_settings

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def migrated_url(tmp_path, monkeypatch):
    """Run `alembic upgrade head` against a temporary SQLite database."""
    url = f"sqlite:///{tmp_path / 'catalog.db'}"
    monkeypatch.setenv("DATABASE_URL", url)

    # env.py reads the URL from the settings, which are cached
    get_settings.cache_clear()
    try:
        config = Config()
        config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
        command.upgrade(config, "head")
    finally:
        get_settings.cache_clear()

    return url


def test_upgrade_creates_tables(migrated_url):
    engine = create_engine(migrated_url)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()

    assert {"authors", "books", "book_genres", "users"} <= tables


def test_timestamp_defaults_apply(migrated_url):
    engine = create_engine(migrated_url)
    try:
        with engine.begin() as conn:
            conn.execute(text("INSERT INTO authors (name) VALUES ('Frank Herbert')"))
            created_at, updated_at = conn.execute(
                text("SELECT created_at, updated_at FROM authors")
            ).one()
    finally:
        engine.dispose()

    assert created_at is not None
    assert updated_at is not None


def test_constraints_enforced(migrated_url):
    engine = create_engine(migrated_url)
    try:
        with engine.connect() as conn:
            with pytest.raises(IntegrityError):
                conn.execute(
                    text("INSERT INTO users (username, favorite_genre) VALUES ('bob', 'crime')")
                )
    finally:
        engine.dispose()
