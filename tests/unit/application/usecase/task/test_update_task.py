"""Unit tests for task use cases."""

import pytest

from together.application.usecase.task import (
    CreateTaskUseCase,
    ListTasksUseCase,
    UpdateTaskUseCase,
)
from together.application.usecase.task.create_task import CreateTaskRequest
from together.application.usecase.task.list_tasks import ListTasksRequest
from together.application.usecase.task.update_task import UpdateTaskRequest
from together.domain.error import ValidationError
from together.domain.service import ListService
from together.persistence.repository.inmemory import InMemoryStore
from tests.harness import create_env_fixture, make_user

# Unit test fixture
unit_env = create_env_fixture()


class TestTaskUseCases:
    """Tests for creating, listing and updating tasks."""

    async def _list(self, env):
        store = await env.get(InMemoryStore)
        alice = make_user(store, "alice@example.com")
        list_service = await env.get(ListService)
        task_list = await list_service.create_list("Groceries", None, alice.id)
        return alice, task_list

    @pytest.mark.asyncio
    async def test_toggle_completion(self, unit_env):
        """Completion is toggled through a partial update."""
        # Arrange
        alice, task_list = await self._list(unit_env)
        create = await unit_env.get(CreateTaskUseCase)
        task = await create.execute(
            CreateTaskRequest(list_id=str(task_list.id), user_id=str(alice.id), title="Milk")
        )
        update = await unit_env.get(UpdateTaskUseCase)

        # Act
        updated = await update.execute(
            UpdateTaskRequest(task_id=task.id, user_id=str(alice.id), completed=True)
        )

        # Assert
        assert updated.completed is True
        assert updated.completed_by == str(alice.id)
        assert updated.title == "Milk"

    @pytest.mark.asyncio
    async def test_blank_title_rejected(self, unit_env):
        # Arrange
        alice, task_list = await self._list(unit_env)
        create = await unit_env.get(CreateTaskUseCase)
        task = await create.execute(
            CreateTaskRequest(list_id=str(task_list.id), user_id=str(alice.id), title="Milk")
        )
        update = await unit_env.get(UpdateTaskUseCase)

        # Act & Assert
        with pytest.raises(ValidationError):
            await update.execute(
                UpdateTaskRequest(task_id=task.id, user_id=str(alice.id), title="")
            )

    @pytest.mark.asyncio
    async def test_list_tasks(self, unit_env):
        # Arrange
        alice, task_list = await self._list(unit_env)
        create = await unit_env.get(CreateTaskUseCase)
        await create.execute(
            CreateTaskRequest(list_id=str(task_list.id), user_id=str(alice.id), title="Milk")
        )
        list_tasks = await unit_env.get(ListTasksUseCase)

        # Act
        response = await list_tasks.execute(
            ListTasksRequest(list_id=str(task_list.id), user_id=str(alice.id))
        )

        # Assert
        assert [t.title for t in response.tasks] == ["Milk"]
