"""
Event System Tests

Tests for the in-process publish/subscribe hub:
- Topic names
- Delivery to registered subscribers
- Subscriber cleanup on close and on shutdown
"""

import asyncio

import pytest

from library_api.services.events import EventPublisher, EventType

# =============================================================================
# Helper Functions
# =============================================================================


async def start_listening(publisher: EventPublisher, topic: str):
    """
    Open a subscription and wait until it is registered.

    The generator registers its queue on the first __anext__ call, so the
    first read is started as a task and the loop is yielded to until the
    subscriber count goes up.

    Returns:
        (stream, first_item_task)
    """
    before = publisher.subscriber_count(topic)
    stream = publisher.subscribe(topic)
    first = asyncio.ensure_future(stream.__anext__())

    for _ in range(100):
        if publisher.subscriber_count(topic) > before:
            break
        await asyncio.sleep(0)

    return stream, first


# =============================================================================
# Tests
# =============================================================================


class TestEventType:
    """Tests for EventType enum."""

    def test_book_added_topic(self):
        assert EventType.BOOK_ADDED == "BOOK_ADDED"


class TestEventPublisher:
    """Tests for EventPublisher."""

    def test_publisher_creation(self):
        publisher = EventPublisher()

        assert publisher.subscriber_count(EventType.BOOK_ADDED) == 0

    @pytest.mark.asyncio
    async def test_publish_without_subscribers(self):
        publisher = EventPublisher()

        delivered = await publisher.publish(EventType.BOOK_ADDED, {"title": "Dune"})

        assert delivered == 0

    @pytest.mark.asyncio
    async def test_subscriber_receives_payload(self):
        publisher = EventPublisher()
        stream, first = await start_listening(publisher, EventType.BOOK_ADDED)

        delivered = await publisher.publish(EventType.BOOK_ADDED, {"title": "Dune"})

        assert delivered == 1
        assert await asyncio.wait_for(first, timeout=1) == {"title": "Dune"}
        await stream.aclose()

    @pytest.mark.asyncio
    async def test_payloads_arrive_in_publish_order(self):
        publisher = EventPublisher()
        stream, first = await start_listening(publisher, EventType.BOOK_ADDED)

        await publisher.publish(EventType.BOOK_ADDED, 1)
        await publisher.publish(EventType.BOOK_ADDED, 2)
        await publisher.publish(EventType.BOOK_ADDED, 3)

        received = [await asyncio.wait_for(first, timeout=1)]
        received.append(await asyncio.wait_for(stream.__anext__(), timeout=1))
        received.append(await asyncio.wait_for(stream.__anext__(), timeout=1))

        assert received == [1, 2, 3]
        await stream.aclose()

    @pytest.mark.asyncio
    async def test_every_subscriber_receives_payload(self):
        publisher = EventPublisher()
        stream_a, first_a = await start_listening(publisher, EventType.BOOK_ADDED)
        stream_b, first_b = await start_listening(publisher, EventType.BOOK_ADDED)

        delivered = await publisher.publish(EventType.BOOK_ADDED, "book")

        assert delivered == 2
        assert await asyncio.wait_for(first_a, timeout=1) == "book"
        assert await asyncio.wait_for(first_b, timeout=1) == "book"
        await stream_a.aclose()
        await stream_b.aclose()

    @pytest.mark.asyncio
    async def test_other_topics_not_delivered(self):
        publisher = EventPublisher()
        stream, first = await start_listening(publisher, EventType.BOOK_ADDED)

        delivered = await publisher.publish("SOMETHING_ELSE", "ignored")

        assert delivered == 0
        assert not first.done()
        first.cancel()
        with pytest.raises(asyncio.CancelledError):
            await first
        assert publisher.subscriber_count(EventType.BOOK_ADDED) == 0

    @pytest.mark.asyncio
    async def test_no_replay_for_late_subscribers(self):
        publisher = EventPublisher()
        await publisher.publish(EventType.BOOK_ADDED, "early")

        stream, first = await start_listening(publisher, EventType.BOOK_ADDED)
        await publisher.publish(EventType.BOOK_ADDED, "late")

        assert await asyncio.wait_for(first, timeout=1) == "late"
        await stream.aclose()

    @pytest.mark.asyncio
    async def test_aclose_unregisters_subscriber(self):
        publisher = EventPublisher()
        stream, first = await start_listening(publisher, EventType.BOOK_ADDED)
        await publisher.publish(EventType.BOOK_ADDED, "one")
        await asyncio.wait_for(first, timeout=1)

        await stream.aclose()

        assert publisher.subscriber_count(EventType.BOOK_ADDED) == 0
        assert await publisher.publish(EventType.BOOK_ADDED, "two") == 0

    @pytest.mark.asyncio
    async def test_close_ends_subscriptions(self):
        publisher = EventPublisher()
        stream, first = await start_listening(publisher, EventType.BOOK_ADDED)

        await publisher.close()

        with pytest.raises(StopAsyncIteration):
            await asyncio.wait_for(first, timeout=1)
        assert publisher.subscriber_count(EventType.BOOK_ADDED) == 0

    @pytest.mark.asyncio
    async def test_publisher_usable_after_close(self):
        publisher = EventPublisher()
        await publisher.close()

        stream, first = await start_listening(publisher, EventType.BOOK_ADDED)
        await publisher.publish(EventType.BOOK_ADDED, "after")

        assert await asyncio.wait_for(first, timeout=1) == "after"
        await stream.aclose()
