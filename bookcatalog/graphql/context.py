"""
GraphQL Context

Provides request context to all GraphQL resolvers including:
- Catalog and account services bound to this request's store
- Current authenticated user (if any)
- The notification hub, for subscriptions

The context is created fresh for each GraphQL request and passed
to all resolvers via the `info` parameter.
"""

from fastapi import HTTPException, WebSocketException, status
from starlette.requests import HTTPConnection
from strawberry.fastapi import BaseContext

from bookcatalog.dependencies import Store
from bookcatalog.errors import AuthenticationFailed
from bookcatalog.schemas import UserRead
from bookcatalog.services.accounts import AccountService
from bookcatalog.services.catalog import CatalogService
from bookcatalog.services.events import get_event_publisher
from bookcatalog.services.pubsub import NotificationHub, get_notification_hub


class CatalogContext(BaseContext):
    """
    Context object available to all GraphQL resolvers.

    Inherits from Strawberry's BaseContext for proper integration.

    Attributes:
        catalog: Book/author business rules
        accounts: User creation and login
        hub: Notification hub backing the bookAdded subscription
        current_user: Authenticated user (None if not authenticated)
    """

    def __init__(
        self,
        catalog: CatalogService,
        accounts: AccountService,
        hub: NotificationHub,
        current_user: UserRead | None = None,
    ):
        super().__init__()
        self.catalog = catalog
        self.accounts = accounts
        self.hub = hub
        self.current_user = current_user


async def get_context(
    connection: HTTPConnection,
    store: Store,
) -> CatalogContext:
    """
    Create GraphQL context for each request.

    This function is called by Strawberry for every GraphQL request and
    every subscription connection. It runs the auth guard on the
    Authorization header of the request or the WebSocket handshake.

    Raises:
        HTTPException: 401 when an HTTP request sends a bearer token that
            cannot be verified. A missing header is not an error.
        WebSocketException: the same failure during a WebSocket handshake
            (closes with policy violation)

    For WebSocket connections the store is released once the guard has
    run, so an idle subscription holds no database connection.
    """
    accounts = AccountService(store)
    catalog = CatalogService(store, get_event_publisher())

    try:
        current_user = accounts.resolve_current_user(
            connection.headers.get("Authorization")
        )
    except AuthenticationFailed as e:
        if connection.scope["type"] == "websocket":
            raise WebSocketException(
                code=status.WS_1008_POLICY_VIOLATION,
                reason=e.message,
            ) from e
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.to_dict(),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    if connection.scope["type"] == "websocket":
        # The connection outlives this call; do not pin a database connection
        store.release()

    return CatalogContext(
        catalog=catalog,
        accounts=accounts,
        hub=get_notification_hub(),
        current_user=current_user,
    )
