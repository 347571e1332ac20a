"""Unit tests for invitation acceptance and rejection use cases."""

from uuid import uuid4

import pytest

from together.application.usecase.invitation import (
    AcceptInvitationUseCase,
    RejectInvitationUseCase,
)
from together.application.usecase.invitation.accept_invitation import (
    AcceptInvitationRequest,
)
from together.application.usecase.invitation.reject_invitation import (
    RejectInvitationRequest,
)
from together.domain.error import RepositoryError
from together.domain.service import InvitationService, ListService
from together.persistence.repository.inmemory import InMemoryStore
from tests.harness import create_env_fixture, make_user

# Unit test fixture
unit_env = create_env_fixture()


class TestAcceptInvitationUseCase:
    """Tests for AcceptInvitationUseCase."""

    async def _invite(self, env):
        store = await env.get(InMemoryStore)
        alice = make_user(store, "alice@example.com")
        bob = make_user(store, "bob@example.com")
        list_service = await env.get(ListService)
        task_list = await list_service.create_list("L1", None, alice.id)
        invitation_service = await env.get(InvitationService)
        invitation = await invitation_service.create_invitation(
            task_list.id, "bob@example.com", alice.id
        )
        return store, bob, task_list, invitation

    @pytest.mark.asyncio
    async def test_success_is_explicit(self, unit_env):
        """A successful accept says so and names the list to open."""
        # Arrange
        _, bob, task_list, invitation = await self._invite(unit_env)
        use_case = await unit_env.get(AcceptInvitationUseCase)

        # Act
        response = await use_case.execute(
            AcceptInvitationRequest(user_id=str(bob.id), invitation_id=str(invitation.id))
        )

        # Assert
        assert response.success is True
        assert response.list_id == str(task_list.id)
        assert response.error is None

    @pytest.mark.asyncio
    async def test_second_accept_reports_already_accepted(self, unit_env):
        # Arrange
        _, bob, _, invitation = await self._invite(unit_env)
        use_case = await unit_env.get(AcceptInvitationUseCase)
        request = AcceptInvitationRequest(user_id=str(bob.id), token=invitation.token.root)
        await use_case.execute(request)

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.success is True
        assert response.already_accepted is True

    @pytest.mark.asyncio
    async def test_failed_step_is_reported(self, unit_env):
        """A membership failure is reported with its step, not as success."""
        # Arrange
        _, bob, _, invitation = await self._invite(unit_env)
        service = await unit_env.get(InvitationService)

        async def failing_find(list_id, user_id):
            raise RepositoryError("find membership", "timeout")

        service.membership_repository.find = failing_find
        use_case = await unit_env.get(AcceptInvitationUseCase)

        # Act
        response = await use_case.execute(
            AcceptInvitationRequest(user_id=str(bob.id), invitation_id=str(invitation.id))
        )

        # Assert
        assert response.success is False
        assert response.error == "accept_failed"
        assert response.failed_step == "membership_check"

    @pytest.mark.asyncio
    async def test_unknown_invitation(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        bob = make_user(store, "bob@example.com")
        use_case = await unit_env.get(AcceptInvitationUseCase)

        # Act
        response = await use_case.execute(
            AcceptInvitationRequest(user_id=str(bob.id), invitation_id=str(uuid4()))
        )

        # Assert
        assert response.success is False
        assert response.error == "not_found"

    @pytest.mark.asyncio
    async def test_bad_token(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        bob = make_user(store, "bob@example.com")
        use_case = await unit_env.get(AcceptInvitationUseCase)

        # Act
        response = await use_case.execute(
            AcceptInvitationRequest(user_id=str(bob.id), token="bogus")
        )

        # Assert
        assert response.success is False
        assert response.error == "invalid_or_expired"

    def test_request_requires_reference(self):
        """Either an invitation ID or a token must be given."""
        with pytest.raises(ValueError):
            AcceptInvitationRequest(user_id=str(uuid4()))


class TestRejectInvitationUseCase:
    """Tests for RejectInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_reject_after_accept_fails(self, unit_env):
        """Accepted invitations stay accepted."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        alice = make_user(store, "alice@example.com")
        bob = make_user(store, "bob@example.com")
        list_service = await unit_env.get(ListService)
        task_list = await list_service.create_list("L1", None, alice.id)
        invitation_service = await unit_env.get(InvitationService)
        invitation = await invitation_service.create_invitation(
            task_list.id, "bob@example.com", alice.id
        )
        await invitation_service.accept(bob.id, invitation_id=invitation.id)
        use_case = await unit_env.get(RejectInvitationUseCase)

        # Act
        response = await use_case.execute(
            RejectInvitationRequest(invitation_id=str(invitation.id), user_id=str(bob.id))
        )

        # Assert
        assert response.success is False
        assert response.error == "invitation_closed"
