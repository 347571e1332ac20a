"""Client-side merge of optimistic changes and server events.

Both the direct response of a mutation and the realtime event for the same
change may arrive, in either order. Every merge here is idempotent per row
id, so applying an event twice converges to the same state.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel

from together.domain.value import ChangeType, InvitationStatus

Row = dict[str, Any]


class Origin(str, Enum):
    """Where a change came from."""

    LOCAL_OPTIMISTIC = "local-optimistic"
    SERVER_CONFIRMED = "server-confirmed"


class RowChange(BaseModel):
    """A tagged insert, update or delete of one row."""

    type: ChangeType
    row_id: str
    row: Row | None = None
    origin: Origin = Origin.SERVER_CONFIRMED
    # For local changes: collection mark taken when the mutation was issued
    since: int | None = None

    @classmethod
    def from_server(cls, payload: dict[str, Any]) -> "RowChange | None":
        """Change from a realtime event payload, None if it names no row."""
        change = ChangeType(payload["type"])
        row = payload.get("record") if change != ChangeType.DELETE else None
        source = row if row is not None else payload.get("old_record")
        if not source or source.get("id") is None:
            return None
        return cls(type=change, row_id=str(source["id"]), row=row)


class KeyedCollection:
    """Ordered rows keyed by ``id``, newest first.

    * insert prepends unless the id is present or was deleted
    * update replaces the row with the same id
    * delete removes it and leaves a tombstone so a late insert cannot
      resurrect it
    * a server-confirmed row is never overwritten by an optimistic copy of
      the same insert, nor by a local update issued before that row was
      confirmed (see ``mark``)
    """

    def __init__(self, rows: list[Row] | None = None) -> None:
        self._rows: list[Row] = []
        self._origins: dict[str, Origin] = {}
        self._confirmed_at: dict[str, int] = {}
        self._clock = 0
        self._tombstones: set[str] = set()
        self.reset(rows or [])

    @property
    def rows(self) -> list[Row]:
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, row_id: str) -> bool:
        return self._index(row_id) is not None

    def get(self, row_id: str) -> Row | None:
        index = self._index(row_id)
        return self._rows[index] if index is not None else None

    def origin(self, row_id: str) -> Origin | None:
        return self._origins.get(row_id)

    def mark(self) -> int:
        """Position in the stream of confirmed changes.

        Taken when a mutation is issued and passed back as ``since`` with its
        direct response.
        """
        return self._clock

    def reset(self, rows: list[Row]) -> None:
        """Replace the collection with a fresh server read."""
        self._clock += 1
        self._rows = [dict(r) for r in rows]
        self._origins = {str(r["id"]): Origin.SERVER_CONFIRMED for r in rows}
        self._confirmed_at = {str(r["id"]): self._clock for r in rows}
        self._tombstones = set()

    def _index(self, row_id: str) -> int | None:
        for i, row in enumerate(self._rows):
            if str(row.get("id")) == row_id:
                return i
        return None

    def apply(self, change: RowChange) -> bool:
        """Merge one change. Returns True if the collection changed."""
        if change.type == ChangeType.DELETE:
            return self._delete(change)
        if change.row_id in self._tombstones:
            return False
        if change.type == ChangeType.INSERT:
            return self._insert(change)
        return self._update(change)

    def _insert(self, change: RowChange) -> bool:
        index = self._index(change.row_id)
        if index is None:
            self._rows.insert(0, dict(change.row or {}))
            self._origins[change.row_id] = change.origin
            self._confirm(change)
            return True

        # Duplicate insert: only a confirmation may replace an optimistic row
        if (
            change.origin == Origin.SERVER_CONFIRMED
            and self._origins.get(change.row_id) == Origin.LOCAL_OPTIMISTIC
        ):
            return self._replace(index, change)
        return False

    def _stale(self, change: RowChange) -> bool:
        if change.origin != Origin.LOCAL_OPTIMISTIC:
            return False
        if self._origins.get(change.row_id) != Origin.SERVER_CONFIRMED:
            return False
        if change.since is None:
            return True
        return self._confirmed_at.get(change.row_id, 0) > change.since

    def _update(self, change: RowChange) -> bool:
        index = self._index(change.row_id)
        if index is None or self._stale(change):
            return False
        return self._replace(index, change)

    def _replace(self, index: int, change: RowChange) -> bool:
        row = dict(change.row or {})
        changed = self._rows[index] != row or self._origins.get(change.row_id) != change.origin
        self._rows[index] = row
        self._origins[change.row_id] = change.origin
        self._confirm(change)
        return changed

    def _confirm(self, change: RowChange) -> None:
        if change.origin == Origin.SERVER_CONFIRMED:
            self._clock += 1
            self._confirmed_at[change.row_id] = self._clock

    def _delete(self, change: RowChange) -> bool:
        self._tombstones.add(change.row_id)
        self._origins.pop(change.row_id, None)
        self._confirmed_at.pop(change.row_id, None)
        index = self._index(change.row_id)
        if index is None:
            return False
        del self._rows[index]
        return True


TERMINAL_STATUSES = frozenset({InvitationStatus.ACCEPTED, InvitationStatus.REJECTED})


class InvitationStatusLedger:
    """Terminal invitation statuses observed by this client.

    Once an invitation is seen accepted or rejected, later reads reporting
    it pending are stale and are overridden.
    """

    def __init__(self) -> None:
        self._terminal: dict[str, InvitationStatus] = {}

    def record(self, invitation_id: str, status: InvitationStatus | str) -> None:
        status = InvitationStatus(status)
        if status in TERMINAL_STATUSES:
            # Lifecycle allows exactly one terminal transition
            self._terminal.setdefault(invitation_id, status)

    def resolve(
        self, invitation_id: str | None, status: InvitationStatus | str | None
    ) -> InvitationStatus | None:
        """Effective status: the observed terminal one, else ``status``."""
        if invitation_id is not None and invitation_id in self._terminal:
            return self._terminal[invitation_id]
        if status is None:
            return None
        resolved = InvitationStatus(status)
        if invitation_id is not None:
            self.record(invitation_id, resolved)
        return resolved

    def __contains__(self, invitation_id: str) -> bool:
        return invitation_id in self._terminal
