"""Shared in-memory tables for the in-memory repositories."""

from dataclasses import dataclass, field

from together.domain.model import (
    Invitation,
    Membership,
    Notification,
    Plan,
    Subscription,
    Task,
    TaskList,
    User,
)
from together.domain.value import InvitationId, ListId, NotificationId, TaskId, UserId


def _default_plans() -> dict[int, Plan]:
    return {
        1: Plan(id=1, name="Free", description="Personal lists", max_lists=3),
        2: Plan(id=2, name="Pro", description="Unlimited shared lists"),
    }


@dataclass
class InMemoryStore:
    """Rows of every table, keyed by primary key.

    Repositories over the same store see each other's writes, which keeps
    joins (memberships with lists, members with emails) consistent.
    """

    users: dict[UserId, User] = field(default_factory=dict)
    passwords: dict[str, str] = field(default_factory=dict)
    lists: dict[ListId, TaskList] = field(default_factory=dict)
    memberships: list[Membership] = field(default_factory=list)
    tasks: dict[TaskId, Task] = field(default_factory=dict)
    invitations: dict[InvitationId, Invitation] = field(default_factory=dict)
    notifications: dict[NotificationId, Notification] = field(default_factory=dict)
    subscriptions: list[Subscription] = field(default_factory=list)
    plans: dict[int, Plan] = field(default_factory=_default_plans)

    def find_user_by_email(self, email: str) -> User | None:
        email = email.strip().lower()
        for user in self.users.values():
            if user.email.root == email:
                return user
        return None

    def add_user(self, user: User, password: str | None = None) -> User:
        """Register a user directly, bypassing sign-up."""
        self.users[user.id] = user
        if password is not None:
            self.passwords[user.email.root] = password
        return user
