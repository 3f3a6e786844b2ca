"""
GraphQL Package

The whole public API of the service, built with Strawberry GraphQL.

Features:
- Book/author catalog queries with author and genre filters
- Mutations for books, authors and user accounts
- Authentication via JWT bearer token in context
- bookAdded subscription over WebSocket

Usage:
    The GraphQL endpoint is available at /graphql with an
    interactive Apollo Sandbox when GRAPHQL_IDE_ENABLED is true.

Example Query:
    query {
        allBooks(author: "Robert Martin", genre: "refactoring") {
            title
            published
            author { name bookCount }
        }
    }
"""

import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.subscriptions import GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL

from bookcatalog.config import get_settings
from bookcatalog.graphql.context import get_context
from bookcatalog.graphql.mutations import Mutation
from bookcatalog.graphql.queries import Query
from bookcatalog.graphql.subscriptions import Subscription

# Create the GraphQL schema
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    subscription=Subscription,
)


def create_graphql_router() -> GraphQLRouter:
    """
    Create the GraphQL router for FastAPI.

    Returns:
        GraphQLRouter configured with schema, context and both
        WebSocket subscription protocols
    """
    settings = get_settings()
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        # Options: "graphiql", "apollo-sandbox", or None to disable
        graphql_ide="apollo-sandbox" if settings.graphql_ide_enabled else None,
        subscription_protocols=[
            GRAPHQL_TRANSPORT_WS_PROTOCOL,
            GRAPHQL_WS_PROTOCOL,
        ],
    )


__all__ = ["schema", "create_graphql_router"]
