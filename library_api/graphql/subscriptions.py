"""
GraphQL Subscription Resolvers

bookAdded pushes every book created by addBook to the clients connected
at that moment. Subscriptions are served over WebSocket at /graphql.

A connection whose bearer token failed verification is refused here:
RejectInvalidCredentials short-circuits queries and mutations, but a
subscription's source stream is created outside that hook.
"""

from collections.abc import AsyncGenerator

import strawberry
from strawberry.types import Info

from library_api.graphql.context import GraphQLContext
from library_api.graphql.types.book import BookType
from library_api.services.events import EventType


@strawberry.type
class Subscription:
    """GraphQL Subscription type."""

    @strawberry.subscription(description="Books as they are added")
    async def book_added(
        self,
        info: Info[GraphQLContext, None],
    ) -> AsyncGenerator[BookType, None]:
        # Raised before subscribing, so no subscriber is registered
        if info.context.auth_error is not None:
            raise info.context.auth_error

        # Leaving the loop (client disconnect) unregisters the subscriber
        async for book in info.context.events.subscribe(EventType.BOOK_ADDED):
            yield book
