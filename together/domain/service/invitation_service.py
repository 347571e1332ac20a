"""Invitation domain service.

Acceptance is split into individually retryable steps instead of one
transaction: flip the invitation, check membership, insert membership,
then mark the invitee's notifications read. A failure names its step.
"""

import secrets
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from together.domain.error import (
    AcceptStepError,
    ConflictError,
    InvitationClosedError,
    InvitationInvalidError,
    NotAuthorizedError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from together.domain.model.common import DomainModel
from together.domain.model.invitation import Invitation
from together.domain.model.task_list import Membership, TaskList
from together.domain.model.user import User
from together.domain.repository import (
    InvitationRepository,
    MembershipRepository,
    TaskListRepository,
    UserRepository,
)
from together.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    ListId,
    MemberRole,
    UserId,
)

from .base import Service
from .notification_service import NotificationService


class ResolvedInvitation(DomainModel):
    """Invitation with the list it grants access to."""

    invitation: Invitation
    task_list: TaskList
    inviter: User | None = None


class AcceptOutcome(DomainModel):
    """Successful result of an acceptance attempt."""

    invitation_id: InvitationId
    list_id: ListId
    already_accepted: bool = False
    already_member: bool = False


def _mask(token: str) -> str:
    return token[:8] + "..."


class InvitationService(Service):
    """Domain service for the invitation lifecycle."""

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        membership_repository: MembershipRepository,
        task_list_repository: TaskListRepository,
        user_repository: UserRepository,
        notification_service: NotificationService,
        link_base: str,
        expiry_days: int = 7,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            membership_repository: Membership repository
            task_list_repository: List repository
            user_repository: User repository
            notification_service: Notification service for invitee notices
            link_base: Absolute URL of the acceptance page
            expiry_days: Days an invitation stays usable
        """
        self.invitation_repository = invitation_repository
        self.membership_repository = membership_repository
        self.task_list_repository = task_list_repository
        self.user_repository = user_repository
        self.notification_service = notification_service
        self.link_base = link_base
        self.expiry_days = expiry_days

    def build_link(self, token: InvitationToken) -> str:
        """Deep link embedding the token."""
        return f"{self.link_base}?token={token.root}"

    async def create_invitation(
        self, list_id: ListId, email: str, invited_by: UserId
    ) -> Invitation:
        """Create an invitation and notify the invitee if they have an account.

        Notification failures are logged and never fail the invitation.

        Args:
            list_id: List to share
            email: Invitee email
            invited_by: Inviting user, must belong to the list

        Returns:
            The stored invitation

        Raises:
            ValidationError: If the email is malformed
            NotAuthorizedError: If the inviter is not a member of the list
        """
        try:
            invitee_email = Email(root=email)
        except PydanticValidationError:
            raise ValidationError(f"Invalid email address: {email}")

        with logfire.span(
            "invitation_service.create_invitation",
            list_id=str(list_id),
            invited_by=str(invited_by),
        ):
            if not await self.membership_repository.is_member(list_id, invited_by):
                raise NotAuthorizedError("list", str(list_id), str(invited_by))

            now = datetime.now(timezone.utc)
            invitation = Invitation(
                id=InvitationId(uuid4()),
                list_id=list_id,
                invited_by=invited_by,
                email=invitee_email,
                token=InvitationToken(root=secrets.token_urlsafe(32)),
                status=InvitationStatus.PENDING,
                created_at=now,
                expires_at=now + timedelta(days=self.expiry_days),
            )
            saved = await self.invitation_repository.create(invitation)
            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                list_id=str(list_id),
                expires_at=saved.expires_at.isoformat(),
            )

            try:
                await self.notification_service.notify_invitation(saved)
            except Exception as e:
                logfire.warn(
                    "Invitation notification not created",
                    invitation_id=str(saved.id),
                    error=str(e),
                )

            return saved

    async def resolve_by_token(self, token: str) -> ResolvedInvitation:
        """Look up an invitation for the anonymous acceptance page.

        Args:
            token: Token from the invitation link

        Returns:
            The invitation with its list and inviter

        Raises:
            InvitationInvalidError: If the token is unknown, the pending
                invitation expired, or the list no longer exists
        """
        with logfire.span("invitation_service.resolve_by_token", token=_mask(token)):
            invitation = await self._find_by_token(token)
            if invitation is None:
                logfire.info("Invitation token not found", token=_mask(token))
                raise InvitationInvalidError()

            if invitation.status == InvitationStatus.PENDING and invitation.is_expired():
                logfire.info("Invitation expired", invitation_id=str(invitation.id))
                raise InvitationInvalidError()

            task_list = await self.task_list_repository.find_by_id(invitation.list_id)
            if task_list is None:
                logfire.info(
                    "Invitation list missing", invitation_id=str(invitation.id)
                )
                raise InvitationInvalidError()

            inviter = await self.user_repository.find_by_id(invitation.invited_by)
            return ResolvedInvitation(
                invitation=invitation, task_list=task_list, inviter=inviter
            )

    async def _find_by_token(self, token: str) -> Invitation | None:
        try:
            parsed = InvitationToken(root=token)
        except PydanticValidationError:
            return None
        return await self.invitation_repository.find_by_token(parsed)

    async def accept(
        self,
        user_id: UserId,
        invitation_id: InvitationId | None = None,
        token: str | None = None,
    ) -> AcceptOutcome:
        """Accept an invitation for ``user_id``.

        Accepting twice is a success: the second call reports
        ``already_accepted``. A pre-existing membership row is reported as
        ``already_member`` and never duplicated.

        Args:
            user_id: Accepting user
            invitation_id: Invitation to accept (notification path)
            token: Invitation token (link path), used when no ID is given

        Returns:
            Outcome with the list to open

        Raises:
            InvitationInvalidError: Unknown token or expired invitation
            NotFoundError: Unknown invitation ID
            InvitationClosedError: Invitation was rejected
            AcceptStepError: A platform call failed; ``step`` names it
        """
        with logfire.span(
            "invitation_service.accept",
            user_id=str(user_id),
            invitation_id=str(invitation_id) if invitation_id else None,
        ):
            try:
                if invitation_id is not None:
                    invitation = await self.invitation_repository.find_by_id(
                        invitation_id
                    )
                    if invitation is None:
                        raise NotFoundError("Invitation", str(invitation_id))
                elif token:
                    invitation = await self._find_by_token(token)
                    if invitation is None:
                        raise InvitationInvalidError()
                else:
                    raise ValidationError("An invitation id or token is required")
            except RepositoryError as e:
                raise AcceptStepError("invitation_lookup", str(e))

            if invitation.status == InvitationStatus.ACCEPTED:
                logfire.info(
                    "Invitation already accepted", invitation_id=str(invitation.id)
                )
                return AcceptOutcome(
                    invitation_id=invitation.id,
                    list_id=invitation.list_id,
                    already_accepted=True,
                )

            if invitation.status == InvitationStatus.REJECTED:
                raise InvitationClosedError(str(invitation.id), invitation.status.value)

            if invitation.is_expired():
                logfire.info("Invitation expired", invitation_id=str(invitation.id))
                raise InvitationInvalidError()

            # (a) flip the invitation
            try:
                updated = await self.invitation_repository.update_status(
                    invitation.id, InvitationStatus.ACCEPTED
                )
            except RepositoryError as e:
                raise AcceptStepError("invitation_update", str(e))
            if updated is None:
                raise AcceptStepError("invitation_update", "invitation disappeared")

            # (b) existing membership
            try:
                existing = await self.membership_repository.find(
                    invitation.list_id, user_id
                )
            except RepositoryError as e:
                raise AcceptStepError("membership_check", str(e))

            already_member = existing is not None

            # (c) membership insert
            if not already_member:
                try:
                    await self.membership_repository.add(
                        Membership(
                            list_id=invitation.list_id,
                            user_id=user_id,
                            role=MemberRole.MEMBER,
                            created_at=datetime.now(timezone.utc),
                        )
                    )
                except ConflictError:
                    # Lost a race with another accept path
                    already_member = True
                except RepositoryError as e:
                    raise AcceptStepError("membership_insert", str(e))

            # (d) notifications, best-effort
            await self._mark_notifications_read(user_id, invitation.id)

            logfire.info(
                "Invitation accepted",
                invitation_id=str(invitation.id),
                list_id=str(invitation.list_id),
                user_id=str(user_id),
                already_member=already_member,
            )
            return AcceptOutcome(
                invitation_id=invitation.id,
                list_id=invitation.list_id,
                already_member=already_member,
            )

    async def reject(self, invitation_id: InvitationId, user_id: UserId) -> Invitation:
        """Reject an invitation.

        Rejecting twice is a no-op. Marking notifications read is best-effort.

        Raises:
            NotFoundError: Unknown invitation
            InvitationClosedError: Invitation was already accepted
        """
        with logfire.span(
            "invitation_service.reject",
            invitation_id=str(invitation_id),
            user_id=str(user_id),
        ):
            invitation = await self.invitation_repository.find_by_id(invitation_id)
            if invitation is None:
                raise NotFoundError("Invitation", str(invitation_id))

            if invitation.status == InvitationStatus.ACCEPTED:
                raise InvitationClosedError(str(invitation.id), invitation.status.value)

            if invitation.status != InvitationStatus.REJECTED:
                updated = await self.invitation_repository.update_status(
                    invitation_id, InvitationStatus.REJECTED
                )
                if updated is None:
                    raise NotFoundError("Invitation", str(invitation_id))
                invitation = updated
                logfire.info("Invitation rejected", invitation_id=str(invitation_id))

            await self._mark_notifications_read(user_id, invitation_id)
            return invitation

    async def _mark_notifications_read(
        self, user_id: UserId, invitation_id: InvitationId
    ) -> None:
        try:
            await self.notification_service.mark_read_for_invitation(
                user_id, invitation_id
            )
        except Exception as e:
            logfire.warn(
                "Could not mark invitation notifications read",
                invitation_id=str(invitation_id),
                error=str(e),
            )
