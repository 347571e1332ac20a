"""Tests for the live task list view."""

import pytest

from together.client.api import Result
from together.client.events import ServerEvent
from together.client.tasks import TaskListSync
from tests.unit.client.fakes import FakeApi, FakeEvents


def _task(task_id: str, title: str = "Milk", completed: bool = False) -> dict:
    return {"id": task_id, "list_id": "l1", "title": title, "completed": completed}


def _event(change: str, record=None, old_record=None) -> ServerEvent:
    return ServerEvent(
        event=change,
        data={"type": change, "record": record, "old_record": old_record},
    )


class TestTaskListSync:
    """Tests for TaskListSync."""

    @pytest.mark.asyncio
    async def test_subscribes_before_loading(self):
        """The event stream is open before the initial read is issued."""
        # Arrange
        api = FakeApi()
        events = FakeEvents()
        api.queue("list_tasks", Result(data={"tasks": [_task("t1")]}))
        seen_at_load: list[int] = []

        async def record():
            seen_at_load.append(len(events.subscriptions))

        api.hooks["list_tasks"] = record
        sync = TaskListSync(api, events)

        # Act
        await sync.open("l1")

        # Assert
        assert seen_at_load == [1]
        assert events.subscriptions[0].path == "/api/events/lists/l1/tasks"
        assert [t["id"] for t in sync.tasks] == ["t1"]

    @pytest.mark.asyncio
    async def test_own_insert_and_its_event_converge(self):
        """The direct response and the realtime echo yield one task."""
        # Arrange
        api = FakeApi()
        events = FakeEvents()
        api.queue("list_tasks", Result(data={"tasks": []}))
        api.queue("create_task", Result(data=_task("t1"), status_code=201))
        sync = TaskListSync(api, events)
        await sync.open("l1")

        # Act
        await sync.add("Milk")
        await events.push(_event("insert", record=_task("t1")))

        # Assert
        assert [t["id"] for t in sync.tasks] == ["t1"]

    @pytest.mark.asyncio
    async def test_other_members_changes_applied(self):
        # Arrange
        api = FakeApi()
        events = FakeEvents()
        api.queue("list_tasks", Result(data={"tasks": [_task("t1")]}))
        sync = TaskListSync(api, events)
        await sync.open("l1")

        # Act
        await events.push(_event("insert", record=_task("t2", "Bread")))
        await events.push(_event("update", record=_task("t1", completed=True)))

        # Assert
        assert [t["id"] for t in sync.tasks] == ["t2", "t1"]
        assert sync.collection.get("t1")["completed"] is True

    @pytest.mark.asyncio
    async def test_deleted_task_not_resurrected(self):
        # Arrange
        api = FakeApi()
        events = FakeEvents()
        api.queue("list_tasks", Result(data={"tasks": [_task("t1")]}))
        api.queue("delete_task", Result(status_code=204))
        sync = TaskListSync(api, events)
        await sync.open("l1")

        # Act
        await sync.remove("t1")
        await events.push(_event("insert", record=_task("t1")))

        # Assert
        assert sync.tasks == []

    @pytest.mark.asyncio
    async def test_response_after_close_dropped(self):
        """A load that finishes after close() leaves the view empty."""
        # Arrange
        api = FakeApi()
        events = FakeEvents()
        api.queue("list_tasks", Result(data={"tasks": [_task("t1")]}))
        sync = TaskListSync(api, events)
        api.hooks["list_tasks"] = sync.close

        # Act
        await sync.open("l1")

        # Assert
        assert sync.tasks == []
        assert sync.active is False
        assert events.subscriptions[0].closed is True

    @pytest.mark.asyncio
    async def test_switch_closes_previous_subscription(self):
        # Arrange
        api = FakeApi()
        events = FakeEvents()
        api.queue("list_tasks", Result(data={"tasks": [_task("t1")]}))
        sync = TaskListSync(api, events)
        await sync.open("l1")
        old = events.subscriptions[0]

        # Act
        await sync.switch("l2")
        await old.handler(_event("insert", record=_task("t9")))

        # Assert
        assert old.closed is True
        assert events.subscriptions[1].path == "/api/events/lists/l2/tasks"
        assert "t9" not in sync.collection

    @pytest.mark.asyncio
    async def test_event_during_load_is_kept(self):
        """An insert delivered before the initial read returns survives it."""
        # Arrange
        api = FakeApi()
        events = FakeEvents()
        api.queue("list_tasks", Result(data={"tasks": [_task("t1")]}))

        async def insert_while_loading():
            await events.push(_event("insert", record=_task("t2", "Bread")))

        api.hooks["list_tasks"] = insert_while_loading
        sync = TaskListSync(api, events)

        # Act
        await sync.open("l1")

        # Assert
        assert [t["id"] for t in sync.tasks] == ["t2", "t1"]

    @pytest.mark.asyncio
    async def test_slow_response_does_not_undo_newer_edit(self):
        """Bob's edit lands while my toggle is in flight; his version stays."""
        # Arrange
        api = FakeApi()
        events = FakeEvents()
        api.queue("list_tasks", Result(data={"tasks": [_task("t1")]}))
        api.queue("update_task", Result(data=_task("t1", completed=True)))
        sync = TaskListSync(api, events)
        await sync.open("l1")

        async def bob_edits():
            await events.push(
                _event("update", record=_task("t1", "Oat milk", completed=True))
            )

        api.hooks["update_task"] = bob_edits

        # Act
        await sync.set_completed("t1", True)

        # Assert
        assert sync.collection.get("t1")["title"] == "Oat milk"

    @pytest.mark.asyncio
    async def test_failed_load_clears_previous_list(self):
        # Arrange
        api = FakeApi()
        events = FakeEvents()
        api.queue("list_tasks", Result(data={"tasks": [_task("t1")]}))
        sync = TaskListSync(api, events)
        await sync.open("l1")
        api.results["list_tasks"] = [Result(error="Not authorized", status_code=403)]

        # Act
        await sync.switch("l2")

        # Assert
        assert sync.tasks == []
        assert sync.error == "Not authorized"

    @pytest.mark.asyncio
    async def test_add_without_open_list(self):
        sync = TaskListSync(FakeApi(), FakeEvents())
        result = await sync.add("Milk")
        assert not result.ok
