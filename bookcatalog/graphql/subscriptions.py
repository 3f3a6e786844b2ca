"""
GraphQL Subscription Resolvers

Live updates over WebSocket (graphql-transport-ws or graphql-ws).

Example:
    subscription {
        bookAdded { title author { name } }
    }
"""

from collections.abc import AsyncGenerator
from contextlib import aclosing

import strawberry
from strawberry.types import Info

from bookcatalog.graphql.context import CatalogContext
from bookcatalog.graphql.queries import book_to_graphql
from bookcatalog.graphql.types.book import BookType
from bookcatalog.services.events import EventType
from bookcatalog.services.pubsub import NotificationHub


async def book_added_stream(hub: NotificationHub) -> AsyncGenerator[BookType, None]:
    """Yield every book announced on the hub from now until the consumer stops."""
    # aclosing detaches from the hub as soon as the client goes away
    async with aclosing(hub.subscribe(EventType.BOOK_ADDED.value)) as events:
        async for event in events:
            yield book_to_graphql(event.data)


@strawberry.type
class Subscription:
    """GraphQL Subscription type."""

    @strawberry.subscription(description="Emits each book as soon as it is added")
    async def book_added(
        self,
        info: Info[CatalogContext, None],
    ) -> AsyncGenerator[BookType, None]:
        async with aclosing(book_added_stream(info.context.hub)) as books:
            async for book in books:
                yield book
                # The payload has been resolved and sent by now
                info.context.catalog.store.release()
