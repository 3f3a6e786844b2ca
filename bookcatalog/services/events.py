"""
Event System for Real-Time Broadcasting

Turns catalog changes into events on the notification hub, where the
GraphQL ``bookAdded`` subscription picks them up.

The catalog service only knows the BookEventSink protocol; EventPublisher
is the production implementation.

Usage:
    from bookcatalog.services.events import get_event_publisher

    publisher = get_event_publisher()
    publisher.book_added(book)
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Protocol

from bookcatalog.schemas import BookRead
from bookcatalog.services.pubsub import NotificationHub, get_notification_hub

logger = logging.getLogger(__name__)


# =============================================================================
# Event Types
# =============================================================================


class EventType(StrEnum):
    """Types of events that can be published. Values double as hub topics."""

    BOOK_ADDED = "BOOK_ADDED"


@dataclass
class Event:
    """
    Represents an event to be published.

    Attributes:
        type: The event type
        data: Event payload
        timestamp: When the event occurred
    """

    type: EventType
    data: Any
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def topic(self) -> str:
        return self.type.value


# =============================================================================
# Output Port
# =============================================================================


class BookEventSink(Protocol):
    """Receives one notification per successfully created book."""

    def book_added(self, book: BookRead) -> None: ...


# =============================================================================
# Event Publisher
# =============================================================================


class EventPublisher:
    """
    Publishes catalog events to the notification hub.

    Publishing is fire-and-forget: a failure is logged and never reaches
    the caller, so it cannot fail the mutation that produced the event.
    """

    def __init__(self, hub: NotificationHub | None = None):
        self.hub = hub or get_notification_hub()

    def publish(self, event: Event) -> int:
        """
        Publish an event to its topic.

        Returns:
            Number of subscribers notified (0 on failure)
        """
        try:
            sent = self.hub.publish(event.topic, event)
        except Exception as e:
            logger.warning(f"Failed to publish {event.type.value}: {e}")
            return 0

        logger.debug(f"Published {event.type.value} to {sent} subscribers")
        return sent

    def book_added(self, book: BookRead) -> None:
        """Announce a newly created book."""
        self.publish(Event(type=EventType.BOOK_ADDED, data=book))


# =============================================================================
# Global Event Publisher Instance
# =============================================================================

event_publisher = EventPublisher()


def get_event_publisher() -> EventPublisher:
    """Get the global event publisher instance."""
    return event_publisher
