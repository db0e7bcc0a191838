"""
GraphQL User Type

Defines the User and Token types.
"""

import strawberry


@strawberry.type(name="User")
class UserType:
    """GraphQL type representing a registered user."""

    id: strawberry.ID
    username: str
    favorite_genre: str


@strawberry.type(name="Token")
class TokenType:
    """
    Response type for the login mutation.

    value is the JWT to send as `Authorization: Bearer <value>`.
    """

    value: str
