"""
GraphQL Query Resolvers

Defines all read operations (queries) for the GraphQL API.
None of them require authentication.
"""

import strawberry
from strawberry.types import Info

from library_api.graphql.context import GraphQLContext
from library_api.graphql.types.author import AuthorType
from library_api.graphql.types.book import BookType
from library_api.graphql.types.user import UserType
from library_api.models import Author, Book, User
from library_api.services import catalog


def author_to_graphql(author: Author, book_count: int | None = None) -> AuthorType:
    """Convert SQLAlchemy Author model to GraphQL AuthorType."""
    return AuthorType(
        id=strawberry.ID(str(author.id)),
        name=author.name,
        born=author.born,
        book_count=book_count,
    )


def book_to_graphql(book: Book) -> BookType:
    """Convert SQLAlchemy Book model to GraphQL BookType."""
    return BookType(
        id=strawberry.ID(str(book.id)),
        title=book.title,
        author=author_to_graphql(book.author),
        published=book.published,
        genres=list(book.genres),
    )


def user_to_graphql(user: User) -> UserType:
    """Convert SQLAlchemy User model to GraphQL UserType."""
    return UserType(
        id=strawberry.ID(str(user.id)),
        username=user.username,
        favorite_genre=user.favorite_genre,
    )


@strawberry.type
class Query:
    """
    GraphQL Query type containing all read operations.

    All resolvers receive an `info` parameter that contains the
    GraphQL context with database session and current user.
    """

    @strawberry.field(description="Total number of books")
    def book_count(self, info: Info[GraphQLContext, None]) -> int:
        return catalog.count_books(info.context.db)

    @strawberry.field(description="Total number of authors")
    def author_count(self, info: Info[GraphQLContext, None]) -> int:
        return catalog.count_authors(info.context.db)

    @strawberry.field(description="List books, filtered by author name or genre")
    def all_books(
        self,
        info: Info[GraphQLContext, None],
        genre: str | None = None,
        author: str | None = None,
    ) -> list[BookType]:
        """
        Get books with an optional filter.

        Args:
            genre: Only books whose genre list contains this exact genre
            author: Only books by the author with this exact name; takes
                precedence over genre when both are given

        Returns:
            Matching books (empty if the author does not exist)
        """
        books = catalog.list_books(info.context.db, genre=genre, author=author)
        return [book_to_graphql(b) for b in books]

    @strawberry.field(description="List all authors with their book counts")
    def all_authors(self, info: Info[GraphQLContext, None]) -> list[AuthorType]:
        rows = catalog.list_authors_with_book_counts(info.context.db)
        return [author_to_graphql(author, book_count=count) for author, count in rows]

    @strawberry.field(description="Get the currently authenticated user")
    def me(self, info: Info[GraphQLContext, None]) -> UserType | None:
        """
        Get the currently authenticated user.

        Returns None if not authenticated.
        """
        user = info.context.user
        if user is None:
            return None
        return user_to_graphql(user)
