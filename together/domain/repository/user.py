"""User repository interface."""

from abc import ABC, abstractmethod

from together.domain.model.user import User
from together.domain.value import Email, UserId


class UserRepository(ABC):
    """Read access to the public users projection."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> User | None:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> User | None:
        """Find a registered user by email.

        Used to attach a notification when an invitee already has an account.

        Args:
            email: Normalized email address

        Returns:
            The user if registered, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Batch lookup. Unknown IDs are skipped.

        Args:
            user_ids: IDs to resolve

        Returns:
            Users that exist, in no particular order
        """
        pass
