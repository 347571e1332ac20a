"""Unit tests for InvitationService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from together.domain.error import (
    AcceptStepError,
    InvitationClosedError,
    InvitationInvalidError,
    NotAuthorizedError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from together.domain.model import Membership
from together.domain.service import InvitationService, ListService
from together.domain.value import InvitationId, InvitationStatus, MemberRole
from together.persistence.repository.inmemory import InMemoryStore
from tests.harness import create_env_fixture, make_user

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def _shared_list(env, owner_email="alice@example.com"):
    store = await env.get(InMemoryStore)
    owner = make_user(store, owner_email)
    list_service = await env.get(ListService)
    task_list = await list_service.create_list("Groceries", None, owner.id)
    return store, owner, task_list


def _memberships(store, list_id, user_id):
    return [
        m for m in store.memberships if m.list_id == list_id and m.user_id == user_id
    ]


class TestCreateInvitation:
    """Tests for create_invitation."""

    @pytest.mark.asyncio
    async def test_creates_pending_invitation_with_seven_day_expiry(self, unit_env):
        """A member can invite; the invitation is pending and expires in 7 days."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        service = await unit_env.get(InvitationService)

        # Act
        invitation = await service.create_invitation(
            task_list.id, "Bob@Example.com", owner.id
        )

        # Assert
        assert invitation.status == InvitationStatus.PENDING
        assert invitation.email.root == "bob@example.com"
        assert len(invitation.token.root) >= 32
        assert invitation.expires_at - invitation.created_at == timedelta(days=7)
        assert store.invitations[invitation.id] == invitation

    @pytest.mark.asyncio
    async def test_link_embeds_token(self, unit_env):
        """The deep link points at the acceptance page with the token."""
        # Arrange
        _, owner, task_list = await _shared_list(unit_env)
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )

        # Act
        link = service.build_link(invitation.token)

        # Assert
        assert link.endswith(f"/accept-invite?token={invitation.token.root}")

    @pytest.mark.asyncio
    async def test_notifies_registered_invitee(self, unit_env):
        """A registered invitee gets a list_invitation notification."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        bob = make_user(store, "bob@example.com")
        service = await unit_env.get(InvitationService)

        # Act
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )

        # Assert
        notifications = [n for n in store.notifications.values() if n.user_id == bob.id]
        assert len(notifications) == 1
        assert notifications[0].data == {
            "invitation_id": str(invitation.id),
            "list_id": str(task_list.id),
            "invited_by": str(owner.id),
        }
        assert notifications[0].read is False

    @pytest.mark.asyncio
    async def test_unregistered_invitee_gets_no_notification(self, unit_env):
        """Inviting an unknown email still succeeds, without a notification."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        service = await unit_env.get(InvitationService)

        # Act
        invitation = await service.create_invitation(
            task_list.id, "nobody@example.com", owner.id
        )

        # Assert
        assert invitation.id in store.invitations
        assert store.notifications == {}

    @pytest.mark.asyncio
    async def test_notification_failure_does_not_fail_invitation(self, unit_env):
        """A failing notification write is swallowed."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        make_user(store, "bob@example.com")
        service = await unit_env.get(InvitationService)

        async def failing_notify(invitation):
            raise RepositoryError("create notification", "platform unavailable")

        service.notification_service.notify_invitation = failing_notify

        # Act
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )

        # Assert
        assert invitation.id in store.invitations
        assert store.notifications == {}

    @pytest.mark.asyncio
    async def test_non_member_cannot_invite(self, unit_env):
        """Only members of the list may invite."""
        # Arrange
        store, _, task_list = await _shared_list(unit_env)
        stranger = make_user(store, "mallory@example.com")
        service = await unit_env.get(InvitationService)

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await service.create_invitation(task_list.id, "bob@example.com", stranger.id)

    @pytest.mark.asyncio
    async def test_invalid_email_rejected(self, unit_env):
        """Malformed emails are rejected before anything is stored."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        service = await unit_env.get(InvitationService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.create_invitation(task_list.id, "not-an-email", owner.id)
        assert store.invitations == {}


class TestResolveByToken:
    """Tests for resolve_by_token."""

    @pytest.mark.asyncio
    async def test_resolves_invitation_list_and_inviter(self, unit_env):
        """A valid token resolves to the invitation, its list and inviter."""
        # Arrange
        _, owner, task_list = await _shared_list(unit_env)
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )

        # Act
        resolved = await service.resolve_by_token(invitation.token.root)

        # Assert
        assert resolved.invitation.id == invitation.id
        assert resolved.task_list.title == "Groceries"
        assert resolved.inviter is not None
        assert resolved.inviter.email.root == "alice@example.com"

    @pytest.mark.asyncio
    async def test_unknown_token_is_invalid(self, unit_env):
        """Unknown tokens report invalid_or_expired."""
        # Arrange
        service = await unit_env.get(InvitationService)

        # Act & Assert
        with pytest.raises(InvitationInvalidError) as exc_info:
            await service.resolve_by_token("does-not-exist")
        assert exc_info.value.code == "invalid_or_expired"

    @pytest.mark.asyncio
    async def test_expired_pending_invitation_is_invalid(self, unit_env):
        """A pending invitation past its expiry cannot be resolved."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )
        store.invitations[invitation.id] = invitation.model_copy(
            update={"expires_at": datetime.now(timezone.utc) - timedelta(minutes=1)}
        )

        # Act & Assert
        with pytest.raises(InvitationInvalidError):
            await service.resolve_by_token(invitation.token.root)

    @pytest.mark.asyncio
    async def test_deleted_list_is_invalid(self, unit_env):
        """An invitation whose list is gone cannot be resolved."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )
        del store.lists[task_list.id]

        # Act & Assert
        with pytest.raises(InvitationInvalidError):
            await service.resolve_by_token(invitation.token.root)


class TestAccept:
    """Tests for accept."""

    @pytest.mark.asyncio
    async def test_accept_by_token_adds_member(self, unit_env):
        """Accepting flips the invitation and adds a member row."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        bob = make_user(store, "bob@example.com")
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )

        # Act
        outcome = await service.accept(bob.id, token=invitation.token.root)

        # Assert
        assert outcome.list_id == task_list.id
        assert outcome.already_accepted is False
        assert outcome.already_member is False
        assert store.invitations[invitation.id].status == InvitationStatus.ACCEPTED
        rows = _memberships(store, task_list.id, bob.id)
        assert len(rows) == 1
        assert rows[0].role == MemberRole.MEMBER

    @pytest.mark.asyncio
    async def test_accept_twice_is_idempotent(self, unit_env):
        """The second accept reports already_accepted and adds nothing."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        bob = make_user(store, "bob@example.com")
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )
        await service.accept(bob.id, invitation_id=invitation.id)

        # Act
        second = await service.accept(bob.id, invitation_id=invitation.id)

        # Assert
        assert second.already_accepted is True
        assert second.list_id == task_list.id
        assert len(_memberships(store, task_list.id, bob.id)) == 1

    @pytest.mark.asyncio
    async def test_existing_membership_reported_not_duplicated(self, unit_env):
        """A membership that already exists is reported as already_member."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        bob = make_user(store, "bob@example.com")
        store.memberships.append(
            Membership(list_id=task_list.id, user_id=bob.id, role=MemberRole.MEMBER)
        )
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )

        # Act
        outcome = await service.accept(bob.id, invitation_id=invitation.id)

        # Assert
        assert outcome.already_member is True
        assert len(_memberships(store, task_list.id, bob.id)) == 1
        assert store.invitations[invitation.id].status == InvitationStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_accept_marks_invitation_notifications_read(self, unit_env):
        """Notifications referencing the invitation are marked read."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        bob = make_user(store, "bob@example.com")
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )

        # Act
        await service.accept(bob.id, invitation_id=invitation.id)

        # Assert
        notifications = [n for n in store.notifications.values() if n.user_id == bob.id]
        assert len(notifications) == 1
        assert notifications[0].read is True

    @pytest.mark.asyncio
    async def test_rejected_invitation_cannot_be_accepted(self, unit_env):
        """Accepting a rejected invitation fails without adding a member."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        bob = make_user(store, "bob@example.com")
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )
        await service.reject(invitation.id, bob.id)

        # Act & Assert
        with pytest.raises(InvitationClosedError):
            await service.accept(bob.id, invitation_id=invitation.id)
        assert _memberships(store, task_list.id, bob.id) == []

    @pytest.mark.asyncio
    async def test_unknown_invitation_id(self, unit_env):
        """An unknown invitation ID raises NotFoundError."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        bob = make_user(store, "bob@example.com")
        service = await unit_env.get(InvitationService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.accept(bob.id, invitation_id=InvitationId(uuid4()))

    @pytest.mark.asyncio
    async def test_membership_insert_failure_names_its_step(self, unit_env):
        """A failed membership insert is reported as membership_insert."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        bob = make_user(store, "bob@example.com")
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )

        async def failing_add(membership):
            raise RepositoryError("add membership", "permission denied")

        service.membership_repository.add = failing_add

        # Act & Assert
        with pytest.raises(AcceptStepError) as exc_info:
            await service.accept(bob.id, invitation_id=invitation.id)
        assert exc_info.value.step == "membership_insert"

    @pytest.mark.asyncio
    async def test_retry_after_insert_failure_reports_already_accepted(self, unit_env):
        """After a partial failure the invitation stays accepted."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        bob = make_user(store, "bob@example.com")
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )
        original_add = service.membership_repository.add

        async def failing_add(membership):
            raise RepositoryError("add membership", "timeout")

        service.membership_repository.add = failing_add
        with pytest.raises(AcceptStepError):
            await service.accept(bob.id, invitation_id=invitation.id)
        service.membership_repository.add = original_add

        # Act
        outcome = await service.accept(bob.id, invitation_id=invitation.id)

        # Assert
        assert outcome.already_accepted is True
        assert store.invitations[invitation.id].status == InvitationStatus.ACCEPTED


class TestReject:
    """Tests for reject."""

    @pytest.mark.asyncio
    async def test_reject_flips_status_and_marks_read(self, unit_env):
        """Rejecting sets rejected and marks the notification read."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        bob = make_user(store, "bob@example.com")
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )

        # Act
        rejected = await service.reject(invitation.id, bob.id)

        # Assert
        assert rejected.status == InvitationStatus.REJECTED
        assert all(n.read for n in store.notifications.values())

    @pytest.mark.asyncio
    async def test_reject_twice_is_noop(self, unit_env):
        """Rejecting an already rejected invitation succeeds."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        bob = make_user(store, "bob@example.com")
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )
        await service.reject(invitation.id, bob.id)

        # Act
        again = await service.reject(invitation.id, bob.id)

        # Assert
        assert again.status == InvitationStatus.REJECTED

    @pytest.mark.asyncio
    async def test_accepted_invitation_cannot_be_rejected(self, unit_env):
        """A terminal accepted invitation never becomes rejected."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        bob = make_user(store, "bob@example.com")
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )
        await service.accept(bob.id, invitation_id=invitation.id)

        # Act & Assert
        with pytest.raises(InvitationClosedError):
            await service.reject(invitation.id, bob.id)
        assert store.invitations[invitation.id].status == InvitationStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_notification_failure_does_not_fail_rejection(self, unit_env):
        """Marking notifications read is best-effort."""
        # Arrange
        store, owner, task_list = await _shared_list(unit_env)
        bob = make_user(store, "bob@example.com")
        service = await unit_env.get(InvitationService)
        invitation = await service.create_invitation(
            task_list.id, "bob@example.com", owner.id
        )

        async def failing_mark(user_id, invitation_id):
            raise RepositoryError("mark read", "unavailable")

        service.notification_service.mark_read_for_invitation = failing_mark

        # Act
        rejected = await service.reject(invitation.id, bob.id)

        # Assert
        assert rejected.status == InvitationStatus.REJECTED
