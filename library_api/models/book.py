"""
Book Model

The central model of the catalog, plus the book_genres table that stores
each book's genre list.

WHY a genre table?
==================
A book's genres are an ordered list of plain strings. Storing them as
positioned rows keeps the "books in genre X" filter a portable indexed
lookup on every backend, instead of a JSON containment query that differs
between PostgreSQL and SQLite.

On the Python side the rows are hidden behind the `genres` association
proxy, so `book.genres` reads and writes like a list of strings:

    book = Book(title="Dune", published=1965, genres=["scifi", "classic"])
    book.genres  # ['scifi', 'classic']
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    func,
)
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.author import Author

BOOK_TITLE_MIN_LENGTH = 4


class BookGenre(Base):
    """
    One genre entry of a book.

    Table: book_genres

    (book_id, position) is the primary key, so the list keeps its order
    and may hold the same genre more than once, exactly as submitted.
    """

    __tablename__ = "book_genres"

    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(
        Text,
        index=True,
        nullable=False,
        comment="Genre label as given to addBook"
    )

    book: Mapped["Book"] = relationship("Book", back_populates="genre_entries")

    def __repr__(self) -> str:
        return f"BookGenre(book_id={self.book_id}, position={self.position}, name='{self.name}')"


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (at least BOOK_TITLE_MIN_LENGTH characters)
    - published: Publication year
    - genres: Ordered list of genre strings (via book_genres)

    Relationships:
    - author: Many-to-One, required
    - genre_entries: One-to-Many BookGenre rows, ordered by position
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        Text,
        index=True,
        nullable=False,
        comment="Book title"
    )

    published: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Year of publication"
    )

    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"),
        index=True,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author: Mapped["Author"] = relationship(
        "Author",
        back_populates="books",
    )

    # ordering_list keeps BookGenre.position in sync with the list index
    genre_entries: Mapped[list[BookGenre]] = relationship(
        BookGenre,
        back_populates="book",
        order_by=BookGenre.position,
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

    genres: AssociationProxy[list[str]] = association_proxy(
        "genre_entries",
        "name",
        creator=lambda name: BookGenre(name=name),
    )

    __table_args__ = (
        CheckConstraint(
            f"length(title) >= {BOOK_TITLE_MIN_LENGTH}",
            name="ck_books_title_length",
        ),
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', published={self.published})"
