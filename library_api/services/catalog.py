"""
Catalog Service

Data operations behind the GraphQL resolvers: counting, filtering and
inserting books, authors and users.

Validation lives in the database (CHECK and UNIQUE constraints). When a
write violates one, SQLAlchemy raises IntegrityError; this module rolls
the session back and lets the error propagate so the resolver can report
it as a BAD_USER_INPUT error.

Every function takes the request's Session as its first argument.
"""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from library_api.models import Author, Book, BookGenre, User

logger = logging.getLogger(__name__)


def _books_query():
    """Base select for books with author and genres eagerly loaded."""
    return (
        select(Book)
        .options(selectinload(Book.author), selectinload(Book.genre_entries))
        .order_by(Book.id)
    )


# =============================================================================
# Counts
# =============================================================================


def count_books(db: Session) -> int:
    """Total number of books."""
    return db.execute(select(func.count()).select_from(Book)).scalar() or 0


def count_authors(db: Session) -> int:
    """Total number of authors."""
    return db.execute(select(func.count()).select_from(Author)).scalar() or 0


def count_books_by_author(db: Session, author_id: int) -> int:
    """Number of books referencing an author."""
    stmt = select(func.count()).select_from(Book).where(Book.author_id == author_id)
    return db.execute(stmt).scalar() or 0


# =============================================================================
# Books
# =============================================================================


def list_books(
    db: Session,
    genre: str | None = None,
    author: str | None = None,
) -> list[Book]:
    """
    List books, optionally filtered by author name or genre.

    Only one filter is applied. An author filter takes precedence over a
    genre filter, and an author name with no matching author yields an
    empty list.

    Args:
        db: Database session
        genre: Exact genre label the book's genre list must contain
        author: Exact author name

    Returns:
        Books ordered by insertion, with author populated
    """
    stmt = _books_query()

    if author is not None:
        existing = find_author_by_name(db, author)
        if existing is None:
            return []
        stmt = stmt.where(Book.author_id == existing.id)
    elif genre is not None:
        stmt = stmt.where(Book.genre_entries.any(BookGenre.name == genre))

    return list(db.execute(stmt).scalars().all())


def get_book(db: Session, book_id: int) -> Book | None:
    """Load a single book with author populated."""
    stmt = _books_query().where(Book.id == book_id)
    return db.execute(stmt).scalar_one_or_none()


def add_book(
    db: Session,
    title: str,
    author_name: str,
    published: int,
    genres: list[str],
) -> Book:
    """
    Insert a book, creating its author on first reference.

    The new author (if any) and the book are committed together, so a
    rejected book does not leave a freshly created author behind.

    Raises:
        AuthorNameRejected: The author had to be created and the name was refused
        IntegrityError: The book row was refused (title too short)
    """
    author = get_or_create_author(db, author_name)

    book = Book(title=title, published=published, genres=list(genres))
    book.author = author
    db.add(book)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise

    logger.info(f"Added book '{title}' by '{author_name}' (id={book.id})")
    return get_book(db, book.id)


def clear_books(db: Session) -> int:
    """
    Delete every book and its genre entries.

    Authors and users are kept.

    Returns:
        Number of books deleted
    """
    db.execute(delete(BookGenre))
    deleted = db.execute(delete(Book)).rowcount
    db.commit()

    logger.info(f"Cleared {deleted} books")
    return deleted


# =============================================================================
# Authors
# =============================================================================


class AuthorNameRejected(Exception):
    """Raised when a new author cannot be created under the given name."""

    def __init__(self, name: str):
        super().__init__(f"Author '{name}' could not be created")
        self.name = name


def find_author_by_name(db: Session, name: str) -> Author | None:
    """Look up an author by exact name."""
    stmt = select(Author).where(Author.name == name)
    return db.execute(stmt).scalar_one_or_none()


def get_or_create_author(db: Session, name: str) -> Author:
    """
    Return the author with this exact name, creating it if needed.

    The new row is flushed but not committed; the caller commits it
    together with whatever references it.

    If the insert violates a constraint, the session is rolled back and
    the lookup retried: a concurrent request may have created the same
    author between our lookup and our insert (UNIQUE on name). If the
    author still doesn't exist, the name itself was refused.

    Raises:
        AuthorNameRejected: The name violates the author constraints
    """
    existing = find_author_by_name(db, name)
    if existing is not None:
        return existing

    author = Author(name=name)
    db.add(author)

    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        existing = find_author_by_name(db, name)
        if existing is not None:
            logger.info(f"Author '{name}' was created concurrently, reusing id={existing.id}")
            return existing
        raise AuthorNameRejected(name) from e

    logger.info(f"Created author '{name}'")
    return author


def list_authors_with_book_counts(db: Session) -> list[tuple[Author, int]]:
    """
    List every author with the number of books referencing it.

    Counts are computed in one grouped query on each call.
    """
    stmt = (
        select(Author, func.count(Book.id))
        .outerjoin(Book, Book.author_id == Author.id)
        .group_by(Author.id)
        .order_by(Author.id)
    )
    return [(author, count) for author, count in db.execute(stmt).all()]


def set_author_born(db: Session, name: str, born: int) -> Author | None:
    """
    Set the birth year of the author with this exact name.

    Returns:
        The updated author, or None if no author has that name
    """
    author = find_author_by_name(db, name)
    if author is None:
        return None

    author.born = born
    db.commit()
    db.refresh(author)

    logger.info(f"Set born={born} for author '{name}'")
    return author


# =============================================================================
# Users
# =============================================================================


def get_user(db: Session, user_id: int) -> User | None:
    """Load a user by primary key."""
    return db.get(User, user_id)


def find_user_by_username(db: Session, username: str) -> User | None:
    """Look up a user by username."""
    stmt = select(User).where(User.username == username)
    return db.execute(stmt).scalar_one_or_none()


def create_user(db: Session, username: str, favorite_genre: str) -> User:
    """
    Create a user.

    Raises:
        IntegrityError: Username already taken or too short
    """
    user = User(username=username, favorite_genre=favorite_genre)
    db.add(user)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise

    db.refresh(user)
    logger.info(f"Created user '{username}' (id={user.id})")
    return user
