"""Realtime change feed interface."""

from collections.abc import Awaitable, Callable

from together.domain.model.realtime import ChangeEvent

ChangeHandler = Callable[[ChangeEvent], Awaitable[None]]


class FeedSubscription:
    """Handle returned by ``ChangeFeed.subscribe``."""

    topic: str

    def unsubscribe(self) -> None:
        """Stop delivery. Calling it more than once is harmless."""
        raise NotImplementedError

    @property
    def active(self) -> bool:
        raise NotImplementedError


class ChangeFeed:
    """Topic-keyed stream of row changes.

    Topics are built with ``task_topic`` and ``notification_topic``.
    """

    def subscribe(self, topic: str, handler: ChangeHandler) -> FeedSubscription:
        """Register a handler for every event published on ``topic``."""
        raise NotImplementedError

    async def publish(self, event: ChangeEvent) -> None:
        """Deliver an event to the current subscribers of its topic.

        A failing subscriber must not prevent delivery to the others or
        fail the publisher.
        """
        raise NotImplementedError
