"""
GraphQL Types Package

Strawberry type definitions exposed by the schema. Python class names end
in `Type`; the GraphQL names are Book, Author, User and Token.
"""

from library_api.graphql.types.author import AuthorType
from library_api.graphql.types.book import BookType
from library_api.graphql.types.user import TokenType, UserType

__all__ = [
    "AuthorType",
    "BookType",
    "TokenType",
    "UserType",
]
