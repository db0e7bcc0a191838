"""
GraphQL Error Types

Errors raised by resolvers and the context builder. Each one carries an
`extensions.code` that clients switch on:

- UNAUTHORIZED: a credential is required but missing, or the bearer
  token failed verification
- BAD_USER_INPUT: the input was refused; `extensions.invalidArgs`
  echoes the rejected value(s)

Example error in a response:

    {
      "message": "Book title must be a minimum of 4 characters long",
      "path": ["addBook"],
      "extensions": {"code": "BAD_USER_INPUT", "invalidArgs": "Doo"}
    }
"""

from typing import TYPE_CHECKING, Any

from graphql import GraphQLError
from strawberry.types import Info

if TYPE_CHECKING:
    from library_api.graphql.context import GraphQLContext
    from library_api.models.user import User


class Unauthorized(GraphQLError):
    """Raised when authentication is required but not provided or invalid."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, extensions={"code": "UNAUTHORIZED"})


class BadUserInput(GraphQLError):
    """Raised when an argument is rejected by validation."""

    def __init__(self, message: str, invalid_args: Any):
        super().__init__(
            message,
            extensions={"code": "BAD_USER_INPUT", "invalidArgs": invalid_args},
        )


def require_user(info: Info["GraphQLContext", None]) -> "User":
    """Helper to require authentication and return the user."""
    user = info.context.user
    if user is None:
        raise Unauthorized()
    return user
