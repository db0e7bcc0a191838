"""
Author Model

Represents an author in the library catalog.

The author name is the natural key: addBook looks authors up by their
exact name and creates them on first reference. The UNIQUE constraint on
name keeps that true when two requests race to create the same author.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.book import Book

AUTHOR_NAME_MIN_LENGTH = 4


class Author(Base):
    """
    Author model representing writers in the catalog.

    Table: authors

    Relationships:
    - books: One-to-Many, every Book references exactly one Author

    Constraints:
    - unique index on name: one row per literal name
    - ck_authors_name_length: name has at least AUTHOR_NAME_MIN_LENGTH characters

    bookCount is not stored here; it is counted from books on every read.
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(
        Text,
        unique=True,
        index=True,
        nullable=False,
        comment="Author's full name, unique across the catalog"
    )

    born: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Year of birth, set through editAuthor"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
    )

    __table_args__ = (
        CheckConstraint(
            f"length(name) >= {AUTHOR_NAME_MIN_LENGTH}",
            name="ck_authors_name_length",
        ),
    )

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name='{self.name}')"
