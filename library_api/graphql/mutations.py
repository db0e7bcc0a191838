"""
GraphQL Mutation Resolvers

Defines all write operations (mutations) for the GraphQL API.

Authentication:
- addBook and editAuthor require a bearer token
- createUser, login and clearDB are open

Input that the database refuses (CHECK or UNIQUE constraint) is reported
as BAD_USER_INPUT with the rejected value in extensions.invalidArgs.
"""

import logging
import secrets

import strawberry
from sqlalchemy.exc import IntegrityError
from strawberry.types import Info

from library_api.config import get_settings
from library_api.graphql.context import GraphQLContext
from library_api.graphql.errors import BadUserInput, require_user
from library_api.graphql.queries import (
    author_to_graphql,
    book_to_graphql,
    user_to_graphql,
)
from library_api.graphql.types.author import AuthorType
from library_api.graphql.types.book import BookType
from library_api.graphql.types.user import TokenType, UserType
from library_api.models import (
    AUTHOR_NAME_MIN_LENGTH,
    BOOK_TITLE_MIN_LENGTH,
    USERNAME_MIN_LENGTH,
)
from library_api.services import catalog
from library_api.services.catalog import AuthorNameRejected
from library_api.services.events import EventType
from library_api.services.security import create_user_token

logger = logging.getLogger(__name__)
settings = get_settings()


@strawberry.type
class Mutation:
    """GraphQL Mutation type containing all write operations."""

    # =========================================================================
    # Catalog Mutations
    # =========================================================================

    @strawberry.mutation(description="Add a book; returns the whole book collection")
    async def add_book(
        self,
        info: Info[GraphQLContext, None],
        title: str,
        author: str,
        published: int,
        genres: list[str],
    ) -> list[BookType]:
        """
        Add a book, creating its author on first reference.

        Requires authentication. Publishes the new book to bookAdded
        subscribers and returns every book in the catalog.
        """
        user = require_user(info)
        db = info.context.db

        try:
            book = catalog.add_book(
                db,
                title=title,
                author_name=author,
                published=published,
                genres=genres,
            )
        except AuthorNameRejected:
            logger.warning(f"Rejected author name {author!r}")
            raise BadUserInput(
                f"Author name must be a minimum of {AUTHOR_NAME_MIN_LENGTH} characters long",
                invalid_args=author,
            )
        except IntegrityError:
            logger.warning(f"Rejected book title {title!r}")
            raise BadUserInput(
                f"Book title must be a minimum of {BOOK_TITLE_MIN_LENGTH} characters long",
                invalid_args=title,
            )

        logger.debug(f"Book {book.id} added by user {user.id}")
        await info.context.events.publish(EventType.BOOK_ADDED, book_to_graphql(book))

        return [book_to_graphql(b) for b in catalog.list_books(db)]

    @strawberry.mutation(description="Set an author's birth year")
    def edit_author(
        self,
        info: Info[GraphQLContext, None],
        name: str,
        set_born_to: int,
    ) -> AuthorType | None:
        """
        Set the birth year of the author with this exact name.

        Requires authentication. Returns None if no author has that name.
        """
        require_user(info)
        db = info.context.db

        author = catalog.set_author_born(db, name, set_born_to)
        if author is None:
            return None

        return author_to_graphql(
            author,
            book_count=catalog.count_books_by_author(db, author.id),
        )

    @strawberry.mutation(name="clearDB", description="Delete every book")
    def clear_db(self, info: Info[GraphQLContext, None]) -> str | None:
        """
        Delete all books. Authors and users are kept.

        Open to anonymous callers.
        """
        catalog.clear_books(info.context.db)
        return "cleared"

    # =========================================================================
    # User Mutations
    # =========================================================================

    @strawberry.mutation(description="Register a new user")
    def create_user(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        favorite_genre: str,
    ) -> UserType | None:
        """Create a user. Usernames are unique."""
        db = info.context.db

        try:
            user = catalog.create_user(db, username, favorite_genre)
        except IntegrityError:
            logger.warning(f"Rejected username {username!r}")
            if catalog.find_user_by_username(db, username) is not None:
                message = "Username already in use"
            else:
                message = f"Username must be a minimum of {USERNAME_MIN_LENGTH} characters long"
            raise BadUserInput(message, invalid_args=username)

        return user_to_graphql(user)

    @strawberry.mutation(description="Log in and receive a bearer token")
    def login(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        password: str,
    ) -> TokenType | None:
        """
        Authenticate a user by username.

        Every user shares the configured login password.
        """
        user = catalog.find_user_by_username(info.context.db, username)

        password_ok = secrets.compare_digest(
            password.encode(),
            settings.login_password.encode(),
        )
        if user is None or not password_ok:
            logger.warning(f"Failed login for {username!r}")
            raise BadUserInput(
                "Wrong username or password",
                invalid_args=[username, password],
            )

        return TokenType(value=create_user_token(user.id, user.username))
