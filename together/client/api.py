"""HTTP client for the ListTogether API.

Every call returns a ``Result``. Transport failures and error responses are
reported in ``error``; nothing raises across this boundary, so views decide
per call whether a failure matters.
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel

from together.client.session import Session, SessionStore

logger = logging.getLogger(__name__)


class Result(BaseModel):
    """Uniform ``{data, error}`` outcome of an API call.

    Error responses keep their parsed body in ``data`` so callers can read
    explicit fields such as ``success`` or ``failed_step``.
    """

    data: Any = None
    error: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def field(self, name: str) -> Any:
        """A top-level field of a JSON object body, or None."""
        if isinstance(self.data, dict):
            return self.data.get(name)
        return None


def _error_message(response: httpx.Response, body: Any) -> str:
    if isinstance(body, dict):
        for key in ("detail", "message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
        if body.get("detail") is not None:
            return str(body["detail"])
    return response.reason_phrase or f"HTTP {response.status_code}"


class ApiClient:
    """Typed wrappers around the API routes."""

    def __init__(self, client: httpx.AsyncClient, session: SessionStore) -> None:
        """Initialize API client.

        Args:
            client: HTTP client with ``base_url`` set to the API
            session: Session store providing the bearer token
        """
        self.client = client
        self.session = session

    def _headers(self) -> dict[str, str]:
        token = self.session.token
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> Result:
        try:
            response = await self.client.request(
                method,
                path,
                json=json,
                params=params,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            return Result(error=str(e) or type(e).__name__)

        body: Any = None
        if response.content:
            try:
                body = response.json()
            except ValueError:
                body = response.text

        if response.is_error:
            return Result(
                data=body,
                error=_error_message(response, body),
                status_code=response.status_code,
            )
        return Result(data=body, status_code=response.status_code)

    # Auth

    async def register(
        self, email: str, password: str, password_confirmation: str
    ) -> Result:
        return await self.request(
            "POST",
            "/api/auth/register",
            json={
                "email": email,
                "password": password,
                "password_confirmation": password_confirmation,
            },
        )

    async def login(
        self, email: str, password: str, redirect: str | None = None
    ) -> Result:
        """Sign in and populate the session store."""
        result = await self.request(
            "POST",
            "/api/auth/login",
            json={"email": email, "password": password, "redirect": redirect},
        )
        if result.ok and isinstance(result.data, dict):
            self.session.set(
                Session(
                    token=result.data["token"],
                    user_id=result.data["user_id"],
                    email=result.data["email"],
                )
            )
        return result

    async def logout(self) -> Result:
        """Sign out. The local session is cleared even if the call fails."""
        result = await self.request("POST", "/api/auth/logout")
        self.session.clear()
        return result

    async def refresh_session(self) -> Result:
        """Reconcile the session store with the server's session check."""
        if not self.session.authenticated:
            return Result(data={"authenticated": False})

        result = await self.request("GET", "/api/auth/me")
        if result.ok and result.field("authenticated") is False:
            logger.info("Session no longer valid, clearing")
            self.session.clear()
        return result

    # Lists and tasks

    async def dashboard(self) -> Result:
        return await self.request("GET", "/dashboard")

    async def get_lists(self) -> Result:
        return await self.request("GET", "/api/lists")

    async def create_list(self, title: str, description: str | None = None) -> Result:
        return await self.request(
            "POST", "/api/lists", json={"title": title, "description": description}
        )

    async def get_list(self, list_id: str) -> Result:
        return await self.request("GET", f"/api/lists/{list_id}")

    async def delete_list(self, list_id: str) -> Result:
        return await self.request("DELETE", f"/api/lists/{list_id}")

    async def get_members(self, list_id: str) -> Result:
        return await self.request("GET", f"/api/lists/{list_id}/members")

    async def list_tasks(self, list_id: str) -> Result:
        return await self.request("GET", f"/api/lists/{list_id}/tasks")

    async def create_task(
        self, list_id: str, title: str, description: str | None = None
    ) -> Result:
        return await self.request(
            "POST",
            f"/api/lists/{list_id}/tasks",
            json={"title": title, "description": description},
        )

    async def update_task(self, task_id: str, **values: Any) -> Result:
        return await self.request("PATCH", f"/api/tasks/{task_id}", json=values)

    async def delete_task(self, task_id: str) -> Result:
        return await self.request("DELETE", f"/api/tasks/{task_id}")

    # Invitations and notifications

    async def create_invitation(self, list_id: str, email: str) -> Result:
        return await self.request(
            "POST", "/api/invitations", json={"list_id": list_id, "email": email}
        )

    async def resolve_invitation(self, token: str) -> Result:
        return await self.request(
            "GET", "/api/invitations/resolve", params={"token": token}
        )

    async def accept_invitation(
        self, invitation_id: str | None = None, token: str | None = None
    ) -> Result:
        return await self.request(
            "POST",
            "/api/invitations/accept",
            json={"invitation_id": invitation_id, "token": token},
        )

    async def reject_invitation(self, invitation_id: str) -> Result:
        return await self.request("POST", f"/api/invitations/{invitation_id}/reject")

    async def get_notifications(self) -> Result:
        return await self.request("GET", "/api/notifications")

    async def mark_notification_read(self, notification_id: str) -> Result:
        return await self.request("POST", f"/api/notifications/{notification_id}/read")

    # Subscriptions

    async def get_subscription(self) -> Result:
        return await self.request("GET", "/api/subscriptions/me")

    async def create_checkout(self, billing: str = "monthly") -> Result:
        return await self.request(
            "POST", "/api/subscriptions/checkout", json={"billing": billing}
        )

    async def cancel_subscription(self) -> Result:
        return await self.request("POST", "/api/subscriptions/cancel")

    async def reactivate_subscription(self) -> Result:
        return await self.request("POST", "/api/subscriptions/reactivate")
