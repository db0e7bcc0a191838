"""
GraphQL Package

This package provides the GraphQL API using Strawberry GraphQL.

Features:
- Queries: bookCount, authorCount, allBooks, allAuthors, me
- Mutations: addBook, editAuthor, createUser, login, clearDB
- Subscription: bookAdded (graphql-transport-ws and graphql-ws)
- Authentication via JWT bearer token in context

Usage:
    The GraphQL endpoint is available at /graphql for POST requests and
    WebSocket subscriptions, with an Apollo Sandbox IDE on GET when enabled.

Example Query:
    query {
        allBooks(genre: "scifi") {
            title
            published
            author { name born }
        }
    }
"""

import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.subscriptions import GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL

from library_api.config import get_settings
from library_api.graphql.context import get_context
from library_api.graphql.extensions import RejectInvalidCredentials
from library_api.graphql.mutations import Mutation
from library_api.graphql.queries import Query
from library_api.graphql.subscriptions import Subscription

schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    subscription=Subscription,
    extensions=[RejectInvalidCredentials],
)


def create_graphql_router() -> GraphQLRouter:
    """
    Create the GraphQL router for FastAPI.

    Returns:
        GraphQLRouter configured with schema, context and subscription protocols
    """
    settings = get_settings()
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        subscription_protocols=[GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL],
        graphql_ide="apollo-sandbox" if settings.graphql_ide_enabled else None,
    )


__all__ = ["schema", "create_graphql_router"]
