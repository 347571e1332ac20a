"""Server-sent event consumer."""

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import httpx
from pydantic import BaseModel

from together.client.session import SessionStore

logger = logging.getLogger(__name__)


class ServerEvent(BaseModel):
    """One SSE frame. ``data`` is the decoded JSON payload."""

    event: str = "message"
    data: Any = None


EventHandler = Callable[[ServerEvent], Awaitable[None]]


def parse_frames(lines: list[str]) -> ServerEvent | None:
    """Build an event from the lines of one frame.

    Comment-only frames (keep-alives) yield None.
    """
    event = "message"
    data_lines: list[str] = []
    for line in lines:
        if not line or line.startswith(":"):
            continue
        field, _, value = line.partition(":")
        value = value[1:] if value.startswith(" ") else value
        if field == "event":
            event = value
        elif field == "data":
            data_lines.append(value)

    if not data_lines:
        return None

    raw = "\n".join(data_lines)
    try:
        data = json.loads(raw)
    except ValueError:
        data = raw
    return ServerEvent(event=event, data=data)


class EventSubscription:
    """Handle for a running stream consumer."""

    def __init__(self, path: str, task: asyncio.Task) -> None:
        self.path = path
        self._task = task

    @property
    def active(self) -> bool:
        return not self._task.done()

    async def close(self) -> None:
        """Stop the consumer. Calling it more than once is harmless."""
        if self._task.done():
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass


class EventSource:
    """Opens SSE streams against the API with the current session."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        session: SessionStore,
        reconnect_delay: float = 2.0,
    ) -> None:
        """Initialize event source.

        Args:
            client: HTTP client with ``base_url`` set to the API
            session: Session store providing the bearer token
            reconnect_delay: Seconds to wait before reopening a dropped stream
        """
        self.client = client
        self.session = session
        self.reconnect_delay = reconnect_delay

    async def stream(self, path: str) -> AsyncIterator[ServerEvent]:
        """Yield events from one connection until the server closes it.

        Raises:
            httpx.HTTPError: If the connection fails or is refused
        """
        headers = {"Accept": "text/event-stream"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        async with self.client.stream(
            "GET", path, headers=headers, timeout=None
        ) as response:
            response.raise_for_status()
            frame: list[str] = []
            async for line in response.aiter_lines():
                if line:
                    frame.append(line)
                    continue
                event = parse_frames(frame)
                frame = []
                if event is not None:
                    yield event

    def subscribe(self, path: str, handler: EventHandler) -> EventSubscription:
        """Consume ``path`` in the background, reconnecting after drops.

        A 4xx response ends the subscription; there is nothing to retry.
        """
        return EventSubscription(path, asyncio.create_task(self._run(path, handler)))

    async def _run(self, path: str, handler: EventHandler) -> None:
        while True:
            try:
                async for event in self.stream(path):
                    try:
                        await handler(event)
                    except Exception as e:
                        logger.error(f"Event handler for {path} failed: {e}")
            except httpx.HTTPStatusError as e:
                if e.response.status_code < 500:
                    logger.warning(f"Event stream {path} refused: {e.response.status_code}")
                    return
                logger.warning(f"Event stream {path} failed: {e}")
            except httpx.HTTPError as e:
                logger.warning(f"Event stream {path} dropped: {e}")

            await asyncio.sleep(self.reconnect_delay)
