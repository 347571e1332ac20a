"""In-process realtime change feed."""

import logging
from collections import defaultdict
from itertools import count

import logfire

from together.domain.model.realtime import ChangeEvent
from together.domain.service.realtime_service import (
    ChangeFeed,
    ChangeHandler,
    FeedSubscription,
)

logger = logging.getLogger(__name__)


class _Subscription(FeedSubscription):
    def __init__(self, feed: "InProcessChangeFeed", topic: str, key: int) -> None:
        self._feed = feed
        self.topic = topic
        self._key = key
        self._active = True

    def unsubscribe(self) -> None:
        if self._active:
            self._active = False
            self._feed._remove(self.topic, self._key)

    @property
    def active(self) -> bool:
        return self._active


class InProcessChangeFeed(ChangeFeed):
    """Fan-out of change events to handlers registered in this process.

    Handlers run sequentially in subscription order on the publisher's
    event loop. Subscribing or unsubscribing during delivery affects the
    next event only.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, dict[int, ChangeHandler]] = defaultdict(dict)
        self._keys = count()

    def subscribe(self, topic: str, handler: ChangeHandler) -> FeedSubscription:
        key = next(self._keys)
        self._handlers[topic][key] = handler
        logger.debug(f"Subscribed to {topic} ({len(self._handlers[topic])} handlers)")
        return _Subscription(self, topic, key)

    def _remove(self, topic: str, key: int) -> None:
        handlers = self._handlers.get(topic)
        if handlers is None:
            return
        handlers.pop(key, None)
        if not handlers:
            del self._handlers[topic]

    def subscriber_count(self, topic: str) -> int:
        return len(self._handlers.get(topic, {}))

    async def publish(self, event: ChangeEvent) -> None:
        handlers = list(self._handlers.get(event.topic, {}).values())
        if not handlers:
            return

        with logfire.span(
            "change_feed.publish",
            topic=event.topic,
            type=event.type.value,
            subscribers=len(handlers),
        ):
            for handler in handlers:
                try:
                    await handler(event)
                except Exception as e:
                    logfire.error(
                        "Change handler failed",
                        topic=event.topic,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
