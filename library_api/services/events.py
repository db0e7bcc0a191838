"""
Event System for Subscriptions

In-process publish/subscribe hub backing the GraphQL subscriptions.

Features:
- Topic-based subscriber registry
- One asyncio.Queue per subscriber, so a slow client never blocks publish
- Subscribers are released when their async generator is closed
  (client disconnect) or when the hub is closed at shutdown

The publisher is constructed by the application factory and handed to
resolvers through the GraphQL context, so tests and separate app
instances each get their own registry.

Usage:
    publisher = EventPublisher()

    # Subscription resolver
    async for book in publisher.subscribe(EventType.BOOK_ADDED):
        yield book

    # Mutation resolver
    await publisher.publish(EventType.BOOK_ADDED, book)
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class EventType(StrEnum):
    """Topics that can be published."""

    BOOK_ADDED = "BOOK_ADDED"


# Queued in place of a payload to tell a subscriber to stop
_CLOSED = object()


class EventPublisher:
    """
    Delivers published payloads to the subscribers of a topic.

    Delivery goes to whichever subscribers are registered at publish time.
    There is no replay for subscribers that join later.
    """

    def __init__(self):
        # Map of topic -> queues of the currently active subscribers
        self._subscribers: dict[str, set[asyncio.Queue]] = {}

    async def publish(self, topic: str, payload: Any) -> int:
        """
        Publish a payload to every current subscriber of a topic.

        Args:
            topic: Topic name (usually an EventType)
            payload: Object delivered to each subscriber

        Returns:
            Number of subscribers the payload was queued for
        """
        queues = list(self._subscribers.get(topic, ()))
        for queue in queues:
            queue.put_nowait(payload)

        logger.debug(f"Published to '{topic}': {len(queues)} subscribers")
        return len(queues)

    async def subscribe(self, topic: str) -> AsyncGenerator[Any, None]:
        """
        Subscribe to a topic.

        Yields payloads in publish order until the generator is closed or
        the publisher shuts down.
        """
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.setdefault(topic, set()).add(queue)
        logger.debug(f"Subscriber joined '{topic}'")

        try:
            while True:
                payload = await queue.get()
                if payload is _CLOSED:
                    break
                yield payload
        finally:
            self._unregister(topic, queue)

    def _unregister(self, topic: str, queue: asyncio.Queue) -> None:
        """Remove a subscriber queue, dropping the topic when it empties."""
        queues = self._subscribers.get(topic)
        if queues is None:
            return

        queues.discard(queue)
        if not queues:
            del self._subscribers[topic]
        logger.debug(f"Subscriber left '{topic}'")

    def subscriber_count(self, topic: str) -> int:
        """Number of active subscribers for a topic."""
        return len(self._subscribers.get(topic, ()))

    async def close(self) -> None:
        """
        End every active subscription.

        Called from the application shutdown hook. The publisher stays
        usable; new subscribers can join afterwards.
        """
        for topic, queues in list(self._subscribers.items()):
            for queue in list(queues):
                queue.put_nowait(_CLOSED)
            logger.info(f"Closing {len(queues)} subscribers on '{topic}'")
