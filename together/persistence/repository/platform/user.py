"""Platform implementation of User repository."""

from typing import Optional

from together.adapter.platform.gateway import eq, in_
from together.domain.model import User
from together.domain.repository import UserRepository
from together.domain.value import Email, UserId
from together.persistence.mappers import row_to_user

from .base import PlatformRepository


class PlatformUserRepository(PlatformRepository, UserRepository):
    """Reads the public ``users`` projection."""

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        result = await self.gateway.select("users", "id,email", [eq("id", user_id)])
        rows = self._rows("users.find_by_id", result)
        return row_to_user(rows[0]) if rows else None

    async def find_by_email(self, email: Email) -> Optional[User]:
        result = await self.gateway.select(
            "users", "id,email", [eq("email", email.root)], limit=1
        )
        rows = self._rows("users.find_by_email", result)
        return row_to_user(rows[0]) if rows else None

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        if not user_ids:
            return []
        result = await self.gateway.select("users", "id,email", [in_("id", user_ids)])
        return [row_to_user(row) for row in self._rows("users.find_by_ids", result)]
