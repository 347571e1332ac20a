"""Tests for the client notification panel state."""

import asyncio
from datetime import datetime, timezone

import pytest

from together.client.api import Result
from together.client.events import ServerEvent
from together.client.notifications import (
    NotificationCenter,
    NotificationView,
    describe,
    is_actionable,
)
from together.domain.value import InvitationStatus
from tests.unit.client.fakes import FakeApi, FakeEvents

CREATED = datetime(2026, 3, 1, tzinfo=timezone.utc).isoformat()


def _item(
    notification_id: str = "n1",
    invitation_id: str | None = "inv1",
    status: str | None = "pending",
    read: bool = False,
    **extra,
) -> dict:
    return {
        "id": notification_id,
        "type": "list_invitation",
        "read": read,
        "created_at": CREATED,
        "data": {},
        "invitation_id": invitation_id,
        "invitation_status": status,
        "list_id": "l1",
        "list_title": extra.get("list_title", "L1"),
        "inviter_email": extra.get("inviter_email", "alice@example.com"),
        "inviter_name": extra.get("inviter_name", "alice"),
    }


def _listing(*items) -> Result:
    return Result(
        data={"notifications": list(items), "unread_count": 0}, status_code=200
    )


async def _center(*items) -> tuple[NotificationCenter, FakeApi, FakeEvents]:
    api = FakeApi()
    events = FakeEvents()
    api.queue("get_notifications", _listing(*items))
    center = NotificationCenter(api, events)
    await center.start()
    return center, api, events


class TestDescribe:
    """Tests for notification text."""

    def test_pending_invitation(self):
        view = NotificationView.model_validate(_item())
        assert describe(view) == 'alice invited you to "L1"'

    def test_fallbacks_for_missing_references(self):
        """Deleted lists and unknown inviters still render."""
        view = NotificationView.model_validate(
            _item(list_title=None, inviter_email=None, inviter_name=None)
        )
        assert describe(view) == "Someone invited you to a list"

    def test_handled_invitation_not_actionable(self):
        """Read state does not matter; only the invitation status does."""
        accepted = NotificationView.model_validate(_item(status="accepted", read=False))
        pending = NotificationView.model_validate(_item(status="pending", read=True))
        assert not is_actionable(accepted)
        assert is_actionable(pending)


class TestNotificationCenter:
    """Tests for NotificationCenter."""

    @pytest.mark.asyncio
    async def test_start_subscribes_and_loads(self):
        # Act
        center, _, events = await _center(_item("n1"), _item("n2", read=True))

        # Assert
        assert events.subscriptions[0].path == "/api/events/notifications"
        assert [n.id for n in center.notifications] == ["n1", "n2"]
        assert center.unread_count == 1

    @pytest.mark.asyncio
    async def test_accept_success_patches_in_place(self):
        """An explicit success marks the item read and accepted."""
        # Arrange
        center, api, _ = await _center(_item())
        api.queue("accept_invitation", Result(data={"success": True, "list_id": "l1"}))
        center.open("n1")

        # Act
        await center.handle_accept(center.notifications[0])

        # Assert
        item = center.find("n1")
        assert item.invitation_status == InvitationStatus.ACCEPTED
        assert item.read is True
        assert center.unread_count == 0
        assert center.open_surface is None
        assert not is_actionable(item)

    @pytest.mark.asyncio
    async def test_missing_success_flag_is_not_success(self):
        """A 2xx body without success: true leaves the item pending."""
        # Arrange
        center, api, _ = await _center(_item())
        api.queue("accept_invitation", Result(data={"list_id": "l1"}, status_code=200))

        # Act
        await center.handle_accept(center.notifications[0])

        # Assert
        assert center.find("n1").invitation_status == InvitationStatus.PENDING
        assert center.unread_count == 1
        assert center.error is not None

    @pytest.mark.asyncio
    async def test_failure_surfaces_message(self):
        # Arrange
        center, api, _ = await _center(_item())
        api.queue(
            "accept_invitation",
            Result(
                data={
                    "success": False,
                    "error": "accept_failed",
                    "failed_step": "membership_insert",
                    "message": "membership_insert: permission denied",
                },
                error="membership_insert: permission denied",
                status_code=502,
            ),
        )

        # Act
        await center.handle_accept(center.notifications[0])

        # Assert
        assert center.error == "membership_insert: permission denied"
        assert is_actionable(center.find("n1"))

    @pytest.mark.asyncio
    async def test_double_click_sends_one_request(self):
        # Arrange
        center, api, _ = await _center(_item())
        api.queue("accept_invitation", Result(data={"success": True}))

        async def slow():
            await asyncio.sleep(0)

        api.hooks["accept_invitation"] = slow
        notification = center.notifications[0]

        # Act
        first, second = await asyncio.gather(
            center.handle_accept(notification), center.handle_accept(notification)
        )

        # Assert
        assert api.called("accept_invitation") == 1
        assert first is not None
        assert second is None

    @pytest.mark.asyncio
    async def test_reload_keeps_accepted_status(self):
        """A stale pending read after accepting is overridden."""
        # Arrange
        center, api, _ = await _center(_item())
        api.queue("accept_invitation", Result(data={"success": True}))
        await center.handle_accept(center.notifications[0])
        api.results["get_notifications"] = [_listing(_item(status="pending", read=True))]

        # Act
        await center.load()

        # Assert
        assert center.find("n1").invitation_status == InvitationStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_reject_marks_read(self):
        # Arrange
        center, api, _ = await _center(_item())
        api.queue("reject_invitation", Result(data={"success": True}))
        api.queue("mark_notification_read", Result(status_code=204))

        # Act
        await center.handle_reject(center.notifications[0])

        # Assert
        assert api.called("mark_notification_read") == 1
        assert center.find("n1").invitation_status == InvitationStatus.REJECTED
        assert center.unread_count == 0

    @pytest.mark.asyncio
    async def test_insert_event_reloads(self):
        # Arrange
        center, api, events = await _center(_item("n1"))
        api.results["get_notifications"] = [_listing(_item("n2"), _item("n1"))]

        # Act
        await events.push(ServerEvent(event="insert", data={}))

        # Assert
        assert [n.id for n in center.notifications] == ["n2", "n1"]
        assert center.unread_count == 2

    @pytest.mark.asyncio
    async def test_stop_drops_late_responses(self):
        """A load that completes after stop() does not touch state."""
        # Arrange
        center, api, events = await _center(_item("n1"))
        api.results["get_notifications"] = [_listing(_item("n2"), _item("n1"))]
        api.hooks["get_notifications"] = center.stop

        # Act
        await center.load()

        # Assert
        assert [n.id for n in center.notifications] == ["n1"]
        assert events.subscriptions[0].closed is True

    @pytest.mark.asyncio
    async def test_load_error_keeps_previous_items(self):
        # Arrange
        center, api, _ = await _center(_item("n1"))
        api.results["get_notifications"] = [Result(error="offline")]

        # Act
        await center.load()

        # Assert
        assert center.error == "offline"
        assert [n.id for n in center.notifications] == ["n1"]
