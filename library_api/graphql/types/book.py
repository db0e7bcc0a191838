"""
GraphQL Book Type

Defines the Book type for GraphQL queries and subscriptions.
"""

import strawberry

from library_api.graphql.types.author import AuthorType


@strawberry.type(name="Book")
class BookType:
    """
    GraphQL type representing a book.

    The author is always populated.
    """

    id: strawberry.ID
    title: str
    author: AuthorType
    published: int
    genres: list[str] = strawberry.field(default_factory=list)
