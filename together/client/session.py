"""Client session state."""

import logging
from collections.abc import Callable

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class Session(BaseModel):
    """Signed-in user as known to the client."""

    token: str
    user_id: str
    email: str


SessionListener = Callable[[Session | None], None]


class SessionStore:
    """Single source of truth for the client's session.

    Views receive the store instead of reading ambient globals. It is
    populated on login or a successful session check and cleared on logout
    or when the server no longer recognizes the session.
    """

    def __init__(self, session: Session | None = None) -> None:
        self._session = session
        self._listeners: list[SessionListener] = []

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def authenticated(self) -> bool:
        return self._session is not None

    @property
    def token(self) -> str | None:
        return self._session.token if self._session else None

    @property
    def user_id(self) -> str | None:
        return self._session.user_id if self._session else None

    def listen(self, listener: SessionListener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def set(self, session: Session) -> None:
        self._session = session
        self._notify()

    def clear(self) -> None:
        if self._session is None:
            return
        self._session = None
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._session)
            except Exception as e:
                logger.error(f"Session listener failed: {e}")
