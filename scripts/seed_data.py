#!/usr/bin/env python3
"""
Database Seed Script

Populates the catalog with the classic demo data set (five authors,
seven books) for development and manual testing.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

This script:
1. Creates tables if they don't exist
2. Clears existing catalog data (optional)
3. Creates a demo user (password: DEFAULT_USER_PASSWORD)
4. Adds authors and books through CatalogService, so every business
   rule applies exactly as it does for API clients
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from bookcatalog.config import get_settings
from bookcatalog.database import SessionLocal, create_tables
from bookcatalog.models import Author, Book, BookGenre, User
from bookcatalog.services import AccountService, CatalogService, get_event_publisher
from bookcatalog.store import SqlCatalogStore

DEMO_USERNAME = "mluukkai"

AUTHORS = [
    {"name": "Robert Martin", "born": 1952},
    {"name": "Martin Fowler", "born": 1963},
    {"name": "Fyodor Dostoevsky", "born": 1821},
    # Joshua Kerievsky and Sandi Metz are created by their books
]

BOOKS = [
    {
        "title": "Clean Code",
        "author": "Robert Martin",
        "published": 2008,
        "genres": ["refactoring"],
    },
    {
        "title": "Agile software development",
        "author": "Robert Martin",
        "published": 2002,
        "genres": ["agile", "patterns", "design"],
    },
    {
        "title": "Refactoring, edition 2",
        "author": "Martin Fowler",
        "published": 2018,
        "genres": ["refactoring"],
    },
    {
        "title": "Refactoring to patterns",
        "author": "Joshua Kerievsky",
        "published": 2008,
        "genres": ["refactoring", "patterns"],
    },
    {
        "title": "Practical Object-Oriented Design, An Agile Primer Using Ruby",
        "author": "Sandi Metz",
        "published": 2012,
        "genres": ["refactoring", "design"],
    },
    {
        "title": "Crime and punishment",
        "author": "Fyodor Dostoevsky",
        "published": 1866,
        "genres": ["classic", "crime"],
    },
    {
        "title": "The Demon",
        "author": "Fyodor Dostoevsky",
        "published": 1872,
        "genres": ["classic", "revolution"],
    },
]


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(BookGenre))
    db.execute(delete(Book))
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
    settings = get_settings()

    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    # Create tables if they don't exist
    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        store = SqlCatalogStore(db)
        accounts = AccountService(store)
        catalog = CatalogService(store, get_event_publisher())

        print("Creating demo user...")
        user = accounts.create_user(DEMO_USERNAME, favorite_genre="refactoring")

        print("Creating authors...")
        for data in AUTHORS:
            catalog.add_author(data["name"], data["born"])

        print("Creating books...")
        for data in BOOKS:
            catalog.add_book(
                current_user=user,
                title=data["title"],
                author_name=data["author"],
                published=data["published"],
                genres=data["genres"],
            )

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {catalog.author_count()}")
        print(f"  - Books: {catalog.book_count()}")
        print(f"  - Demo login: {DEMO_USERNAME} / {settings.default_user_password}")
        print(f"\nGraphQL endpoint at http://localhost:{settings.port}/graphql")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
