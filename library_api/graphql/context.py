"""
GraphQL Context

Provides request context to all GraphQL resolvers including:
- Database session for queries
- Current authenticated user (if any)
- The event publisher used by addBook and the bookAdded subscription

The context is created once per GraphQL request (or once per WebSocket
connection for subscriptions) and passed to all resolvers via the `info`
parameter.
"""

import logging
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.orm import Session
from starlette.requests import HTTPConnection
from strawberry.fastapi import BaseContext

from library_api.database import get_db
from library_api.graphql.errors import Unauthorized
from library_api.services import catalog
from library_api.services.events import EventPublisher
from library_api.services.security import decode_access_token

if TYPE_CHECKING:
    from library_api.models.user import User

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class GraphQLContext(BaseContext):
    """
    Context object available to all GraphQL resolvers.

    Attributes:
        db: SQLAlchemy database session
        user: Currently authenticated user (None if anonymous)
        events: Publisher shared by mutations and subscriptions
        auth_error: Set when the bearer token failed verification; the
            operation is then rejected before any resolver runs
    """

    def __init__(
        self,
        db: Session,
        events: EventPublisher,
        user: "User | None" = None,
        auth_error: Unauthorized | None = None,
    ):
        super().__init__()
        self.db = db
        self.events = events
        self.user = user
        self.auth_error = auth_error


def resolve_current_user(db: Session, authorization: str | None) -> "User | None":
    """
    Resolve the Authorization header value to a user.

    Args:
        db: Database session
        authorization: Raw header value, e.g. "Bearer eyJhbGciOi..."

    Returns:
        The user the token belongs to, or None when there is no bearer
        credential or the user no longer exists

    Raises:
        Unauthorized: The token is malformed, tampered with or expired
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None

    token = authorization[len(BEARER_PREFIX):]

    payload = decode_access_token(token)
    if payload is None:
        raise Unauthorized("Invalid token")

    try:
        user_id = int(payload["id"])
    except (TypeError, ValueError):
        logger.warning(f"Token id claim is not a user id: {payload['id']!r}")
        raise Unauthorized("Invalid token")

    user = catalog.get_user(db, user_id)
    if user is None:
        logger.info(f"Token refers to missing user id={user_id}, treating as anonymous")

    return user


async def get_context(
    connection: HTTPConnection,
    db: Session = Depends(get_db),
) -> GraphQLContext:
    """
    Create GraphQL context for each request.

    Strawberry resolves this as a FastAPI dependency, for both HTTP
    requests and WebSocket connections, so the session comes from get_db
    and is closed when the connection ends.

    Args:
        connection: The incoming HTTP request or WebSocket
        db: Database session for this request

    Returns:
        GraphQLContext with db session, events and optional user
    """
    events: EventPublisher = connection.app.state.events

    try:
        user = resolve_current_user(db, connection.headers.get("Authorization"))
    except Unauthorized as e:
        return GraphQLContext(db=db, events=events, auth_error=e)

    if user is not None:
        # Detached, the loaded row stays readable after the rollback below
        db.expunge(user)

    # A WebSocket keeps this session for the whole connection; the lookup's
    # transaction must not hold a pooled connection while it sits idle
    db.rollback()

    return GraphQLContext(db=db, events=events, user=user)
