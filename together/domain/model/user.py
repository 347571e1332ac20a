"""User entity."""

from datetime import datetime
from typing import Optional

from together.domain.model.common import DomainModel
from together.domain.value import Email, UserId


class User(DomainModel):
    """Registered account.

    Accounts live in the platform's auth service; this is the public
    projection readable by other users (used to resolve invitees by email
    and to show inviter names).
    """

    id: UserId
    email: Email
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        """Name shown to other users: the local part of the email."""
        return self.email.local_part


class AuthSession(DomainModel):
    """Session issued by the platform after a successful sign-in."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: int = 3600
    user: User
