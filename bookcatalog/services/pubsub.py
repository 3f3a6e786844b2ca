"""
Notification Hub

Topic-based publish/subscribe used to push events to GraphQL subscribers.

Features:
- Broadcast: every active subscriber of a topic gets every payload
- Non-blocking publish, callable from sync resolvers and worker threads
- Subscriber tracking per topic for health/statistics

Usage:
    hub = NotificationHub()

    async for payload in hub.subscribe("BOOK_ADDED"):
        ...

    hub.publish("BOOK_ADDED", book)
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

logger = logging.getLogger(__name__)

# Payloads a subscriber may fall behind by before new ones are dropped
SUBSCRIBER_QUEUE_SIZE = 100


@dataclass(eq=False)
class Subscriber:
    """One live subscription: a bounded queue drained on its owner's event loop."""

    topic: str
    loop: asyncio.AbstractEventLoop
    queue: asyncio.Queue = field(
        default_factory=lambda: asyncio.Queue(maxsize=SUBSCRIBER_QUEUE_SIZE)
    )
    dropped: int = 0
    subscribed_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def deliver(self, payload: Any) -> None:
        """Queue a payload; runs on the subscriber's loop."""
        try:
            self.queue.put_nowait(payload)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(
                f"Queue full for subscriber on topic '{self.topic}', "
                f"dropped message (total dropped={self.dropped})"
            )


class NotificationHub:
    """
    Manages subscribers across multiple topics.

    publish() never awaits: the payload is handed to each subscriber's
    queue through loop.call_soon_threadsafe, so a slow or dead subscriber
    can never hold up the publisher. A subscriber that falls
    SUBSCRIBER_QUEUE_SIZE payloads behind loses the newest ones.
    """

    def __init__(self):
        # Map of topic -> list of subscribers
        self.active_subscribers: dict[str, list[Subscriber]] = {}

    def publish(self, topic: str, payload: Any) -> int:
        """
        Broadcast a payload to all subscribers of a topic.

        Args:
            topic: Topic to publish to
            payload: Object delivered unchanged to every subscriber

        Returns:
            Number of subscribers the payload was handed to
        """
        subscribers = list(self.active_subscribers.get(topic, []))
        sent_count = 0
        failed: list[Subscriber] = []

        for subscriber in subscribers:
            try:
                subscriber.loop.call_soon_threadsafe(subscriber.deliver, payload)
                sent_count += 1
            except RuntimeError as e:
                # Event loop already closed: the client went away without cleanup
                logger.warning(f"Dropping subscriber on topic '{topic}': {e}")
                failed.append(subscriber)

        for subscriber in failed:
            self._remove(subscriber)

        logger.debug(
            f"Published to topic '{topic}': {sent_count} sent, {len(failed)} failed"
        )
        return sent_count

    async def subscribe(self, topic: str) -> AsyncIterator[Any]:
        """
        Yield every payload published to ``topic`` from now on.

        The sequence is unbounded; it ends when the consumer stops iterating
        (client disconnect closes the generator and unregisters it).
        """
        subscriber = Subscriber(topic=topic, loop=asyncio.get_running_loop())
        self.active_subscribers.setdefault(topic, []).append(subscriber)
        logger.info(
            f"Subscriber attached to topic '{topic}' "
            f"(total on topic={self.get_topic_count(topic)})"
        )

        try:
            while True:
                yield await subscriber.queue.get()
        finally:
            self._remove(subscriber)

    def _remove(self, subscriber: Subscriber) -> None:
        """Unregister a subscriber and drop empty topics."""
        subscribers = self.active_subscribers.get(subscriber.topic)
        if not subscribers or subscriber not in subscribers:
            return

        subscribers.remove(subscriber)
        if not subscribers:
            del self.active_subscribers[subscriber.topic]

        logger.info(f"Subscriber detached from topic '{subscriber.topic}'")

    def get_topic_count(self, topic: str) -> int:
        """Get the number of subscribers on a topic."""
        return len(self.active_subscribers.get(topic, []))

    def get_total_subscribers(self) -> int:
        """Get total number of live subscribers."""
        return sum(len(subs) for subs in self.active_subscribers.values())

    def get_stats(self) -> dict[str, Any]:
        """Get subscriber statistics."""
        return {
            "total_subscribers": self.get_total_subscribers(),
            "topics": {
                topic: len(subscribers)
                for topic, subscribers in self.active_subscribers.items()
            },
        }


# Global hub instance
hub = NotificationHub()


def get_notification_hub() -> NotificationHub:
    """Get the global notification hub instance."""
    return hub
