#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample authors, books and users for
development.

USAGE:
    # From the project root with the virtualenv active
    python scripts/seed_data.py

    # Keep existing rows
    python scripts/seed_data.py --keep

This script:
1. Connects to the database using the app settings
2. Clears existing rows (unless --keep)
3. Adds books through the catalog service, which creates their authors
4. Sets birth years and creates a couple of users
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from library_api.database import SessionLocal, create_tables
from library_api.models import Author, User
from library_api.services import catalog

BOOKS = [
    {
        "title": "Clean Code",
        "author_name": "Robert Martin",
        "published": 2008,
        "genres": ["refactoring"],
    },
    {
        "title": "Agile software development",
        "author_name": "Robert Martin",
        "published": 2002,
        "genres": ["agile", "patterns", "design"],
    },
    {
        "title": "Refactoring, edition 2",
        "author_name": "Martin Fowler",
        "published": 2018,
        "genres": ["refactoring"],
    },
    {
        "title": "Refactoring to patterns",
        "author_name": "Joshua Kerievsky",
        "published": 2008,
        "genres": ["refactoring", "patterns"],
    },
    {
        "title": "Practical Object-Oriented Design, An Agile Primer Using Ruby",
        "author_name": "Sandi Metz",
        "published": 2012,
        "genres": ["refactoring", "design"],
    },
    {
        "title": "Crime and punishment",
        "author_name": "Fyodor Dostoevsky",
        "published": 1866,
        "genres": ["classic", "crime"],
    },
    {
        "title": "Demons",
        "author_name": "Fyodor Dostoevsky",
        "published": 1872,
        "genres": ["classic", "revolution"],
    },
]

BIRTH_YEARS = {
    "Robert Martin": 1952,
    "Martin Fowler": 1963,
    "Fyodor Dostoevsky": 1821,
}

USERS = [
    {"username": "mluukkai", "favorite_genre": "refactoring"},
    {"username": "alice", "favorite_genre": "classic"},
]


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    catalog.clear_books(db)
    db.execute(delete(Author))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        for data in BOOKS:
            catalog.add_book(db, **data)
        print(f"Added {len(BOOKS)} books.")

        for name, born in BIRTH_YEARS.items():
            catalog.set_author_born(db, name, born)

        for data in USERS:
            catalog.create_user(db, data["username"], data["favorite_genre"])
        print(f"Created {len(USERS)} users.")

        print("=" * 60)
        print(
            f"Done: {catalog.count_books(db)} books, "
            f"{catalog.count_authors(db)} authors."
        )
        print("=" * 60)
    finally:
        db.close()


if __name__ == "__main__":
    seed_database(clear_existing="--keep" not in sys.argv)
