"""Realtime DI provider."""

from dishka import Scope, provide

from together.adapter.realtime.feed import InProcessChangeFeed
from together.domain.service import ChangeFeed
from together.util.di.base import ProviderBase


class RealtimeProvider(ProviderBase):
    """Change feed shared by every request of the process.

    Concrete: the in-process feed is the same in tests and production.
    """

    @provide(scope=Scope.APP)
    def get_change_feed(self) -> ChangeFeed:
        return InProcessChangeFeed()
