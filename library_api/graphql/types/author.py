"""
GraphQL Author Type

Defines the Author type for GraphQL queries.
"""

import strawberry


@strawberry.type(name="Author")
class AuthorType:
    """
    GraphQL type representing a book author.

    bookCount is filled in by resolvers that compute it (allAuthors,
    editAuthor); it is null where the author is only embedded in a book.
    """

    id: strawberry.ID
    name: str
    born: int | None = None
    book_count: int | None = None
