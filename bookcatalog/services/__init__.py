"""
Services Package

Business logic kept apart from the GraphQL layer so it can be tested
without a server:

- catalog.py: Book/author queries and mutations (allBooks filters, addBook)
- accounts.py: User creation, login and the bearer-token auth guard
- security.py: Password hashing and JWT utilities
- pubsub.py: Topic-based notification hub for subscriptions
- events.py: Publishes catalog events to the hub
"""

from bookcatalog.services.accounts import AccountService
from bookcatalog.services.catalog import ALL_GENRES, CatalogService
from bookcatalog.services.events import EventPublisher, get_event_publisher
from bookcatalog.services.pubsub import NotificationHub, get_notification_hub

__all__ = [
    "ALL_GENRES",
    "AccountService",
    "CatalogService",
    "EventPublisher",
    "NotificationHub",
    "get_event_publisher",
    "get_notification_hub",
]
