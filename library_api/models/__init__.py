"""
SQLAlchemy Models Package

Model Relationships:
- Author -> Book: One-to-Many (a book references exactly one author)
- Book -> BookGenre: One-to-Many (ordered genre strings)
- User: standalone

Import all models here to:
1. Make them available as: from library_api.models import Book, Author, User
2. Ensure Alembic discovers them for migrations
"""

from library_api.models.author import AUTHOR_NAME_MIN_LENGTH, Author
from library_api.models.book import BOOK_TITLE_MIN_LENGTH, Book, BookGenre
from library_api.models.user import USERNAME_MIN_LENGTH, User

__all__ = [
    "Author",
    "Book",
    "BookGenre",
    "User",
    "AUTHOR_NAME_MIN_LENGTH",
    "BOOK_TITLE_MIN_LENGTH",
    "USERNAME_MIN_LENGTH",
]
