"""Live view of one list's tasks."""

import logging

from together.client.api import ApiClient, Result
from together.client.events import EventSource, EventSubscription, ServerEvent
from together.client.reconcile import KeyedCollection, Origin, Row, RowChange
from together.domain.value import ChangeType

logger = logging.getLogger(__name__)


class TaskListSync:
    """Keeps the tasks of the open list current.

    The view's own mutations are applied optimistically from their direct
    responses; realtime events from the server confirm them and carry the
    changes of other members. Responses that arrive after ``close()`` or
    after switching lists are dropped.
    """

    def __init__(self, api: ApiClient, events: EventSource) -> None:
        self.api = api
        self.events = events
        self.collection = KeyedCollection()
        self.list_id: str | None = None
        self.error: str | None = None
        self._subscription: EventSubscription | None = None
        self._generation = 0
        # Events received while the initial read is in flight
        self._buffered: list[RowChange] | None = None

    @property
    def tasks(self) -> list[Row]:
        return self.collection.rows

    @property
    def active(self) -> bool:
        return self.list_id is not None

    def _current(self, generation: int) -> bool:
        return self.list_id is not None and generation == self._generation

    async def open(self, list_id: str) -> Result:
        """Subscribe to the list's task events, then load its tasks."""
        await self.close()
        self._generation += 1
        generation = self._generation
        self.list_id = list_id
        self.error = None

        # Subscribe first and hold events until the read lands, then replay
        # them over it so nothing committed around the read is lost
        self._buffered = []
        self._subscription = self.events.subscribe(
            f"/api/events/lists/{list_id}/tasks",
            lambda event: self._on_event(generation, event),
        )

        result = await self.api.list_tasks(list_id)
        if not self._current(generation):
            return result
        buffered, self._buffered = self._buffered or [], None
        if result.ok:
            self.collection.reset(result.field("tasks") or [])
        else:
            self.collection.reset([])
            self.error = result.error
        for change in buffered:
            self.collection.apply(change)
        return result

    async def switch(self, list_id: str) -> Result:
        """Move the view to another list."""
        return await self.open(list_id)

    async def close(self) -> None:
        """Tear down the subscription. Pending responses become no-ops."""
        self.list_id = None
        self._buffered = None
        self._generation += 1
        if self._subscription is not None:
            subscription, self._subscription = self._subscription, None
            await subscription.close()

    async def _on_event(self, generation: int, event: ServerEvent) -> None:
        if not self._current(generation) or not isinstance(event.data, dict):
            return
        change = RowChange.from_server(event.data)
        if change is None:
            return
        if self._buffered is not None:
            self._buffered.append(change)
        else:
            self.collection.apply(change)

    def _apply_local(
        self, generation: int, since: int, change: ChangeType, result: Result
    ) -> None:
        if not result.ok or not self._current(generation):
            return
        row = result.data if isinstance(result.data, dict) else None
        if row is None or row.get("id") is None:
            return
        self.collection.apply(
            RowChange(
                type=change,
                row_id=str(row["id"]),
                row=row,
                origin=Origin.LOCAL_OPTIMISTIC,
                since=since,
            )
        )

    async def add(self, title: str, description: str | None = None) -> Result:
        if self.list_id is None:
            return Result(error="No list is open")
        generation, since = self._generation, self.collection.mark()
        result = await self.api.create_task(self.list_id, title, description)
        self._apply_local(generation, since, ChangeType.INSERT, result)
        return result

    async def set_completed(self, task_id: str, completed: bool) -> Result:
        generation, since = self._generation, self.collection.mark()
        result = await self.api.update_task(task_id, completed=completed)
        self._apply_local(generation, since, ChangeType.UPDATE, result)
        return result

    async def edit(
        self, task_id: str, title: str | None = None, description: str | None = None
    ) -> Result:
        generation, since = self._generation, self.collection.mark()
        values = {k: v for k, v in (("title", title), ("description", description)) if v is not None}
        result = await self.api.update_task(task_id, **values)
        self._apply_local(generation, since, ChangeType.UPDATE, result)
        return result

    async def remove(self, task_id: str) -> Result:
        generation = self._generation
        result = await self.api.delete_task(task_id)
        if result.ok and self._current(generation):
            self.collection.apply(
                RowChange(
                    type=ChangeType.DELETE,
                    row_id=task_id,
                    origin=Origin.LOCAL_OPTIMISTIC,
                )
            )
        return result
