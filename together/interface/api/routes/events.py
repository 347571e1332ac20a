"""Server-sent event streams of realtime changes.

Each connection holds one feed subscription for its topic. The subscription
is dropped when the client disconnects or the stream is cancelled.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Request
from fastapi.responses import StreamingResponse

from together.domain.model.realtime import ChangeEvent, notification_topic, task_topic
from together.domain.service import ChangeFeed, JWTService, ListService
from together.domain.value import ListId, UserId
from together.interface.api.session import authenticate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["events"], route_class=DishkaRoute)

KEEPALIVE_SECONDS = 15.0

_SSE_HEADERS = {"Cache-Control": "no-cache", "X-Accel-Buffering": "no"}


def format_event(event: ChangeEvent) -> str:
    """One SSE frame named after the change type."""
    return f"event: {event.type.value}\ndata: {event.model_dump_json()}\n\n"


async def event_stream(
    request: Request,
    feed: ChangeFeed,
    topic: str,
    keepalive: float = KEEPALIVE_SECONDS,
) -> AsyncIterator[str]:
    """Yield SSE frames for ``topic`` until the client goes away."""
    queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()

    async def enqueue(event: ChangeEvent) -> None:
        queue.put_nowait(event)

    subscription = feed.subscribe(topic, enqueue)
    logger.info(f"Event stream opened for {topic}")
    try:
        yield ": subscribed\n\n"
        while True:
            if await request.is_disconnected():
                break
            try:
                event = await asyncio.wait_for(queue.get(), timeout=keepalive)
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue
            yield format_event(event)
    finally:
        subscription.unsubscribe()
        logger.info(f"Event stream closed for {topic}")


@router.get("/lists/{list_id}/tasks")
async def task_events(
    list_id: UUID,
    request: Request,
    feed: FromDishka[ChangeFeed],
    list_service: FromDishka[ListService],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> StreamingResponse:
    """Insert, update and delete events for the tasks of one list.

    Members only; others get 403 before the stream opens.
    """
    payload = authenticate(jwt_service, auth_token, authorization)
    await list_service.ensure_member(ListId(list_id), UserId(UUID(payload.user_id)))

    return StreamingResponse(
        event_stream(request, feed, task_topic(ListId(list_id))),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )


@router.get("/notifications")
async def notification_events(
    request: Request,
    feed: FromDishka[ChangeFeed],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> StreamingResponse:
    """Notification inserts for the current user."""
    payload = authenticate(jwt_service, auth_token, authorization)
    topic = notification_topic(UserId(UUID(payload.user_id)))

    return StreamingResponse(
        event_stream(request, feed, topic),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )
