"""In-memory user repository for testing."""

from typing import Optional

from together.domain.model.user import User
from together.domain.repository.user import UserRepository
from together.domain.value import Email, UserId

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self.store.users.get(user_id)

    async def find_by_email(self, email: Email) -> Optional[User]:
        return self.store.find_user_by_email(email.root)

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        return [self.store.users[uid] for uid in user_ids if uid in self.store.users]
