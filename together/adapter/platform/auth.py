"""Platform authentication adapter."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID, uuid4

import httpx
from pydantic import ValidationError as PydanticValidationError

from together.adapter.error import PlatformError
from together.config import PlatformSettings
from together.domain.error import AuthenticationError
from together.domain.model.user import AuthSession, User
from together.domain.service.auth_service import AuthClient
from together.domain.value import Email, UserId
from together.persistence.repository.inmemory.store import InMemoryStore
from together.util.jwt import JWTError, create_token, verify_token

logger = logging.getLogger(__name__)


def _user_from_payload(payload: dict[str, Any]) -> User:
    return User(
        id=UserId(UUID(str(payload["id"]))),
        email=Email(root=payload["email"]),
        created_at=payload.get("created_at"),
    )


class PlatformAuthClient(AuthClient):
    """Email/password auth against the platform's ``/auth/v1`` API."""

    def __init__(self, client: httpx.AsyncClient, api_key: str) -> None:
        """Initialize auth client.

        Args:
            client: HTTP client with ``base_url`` set to the platform URL
            api_key: Project anon key
        """
        self.client = client
        self.api_key = api_key

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {access_token or self.api_key}",
        }

    async def _post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        access_token: str | None = None,
    ) -> httpx.Response:
        try:
            return await self.client.post(
                path,
                json=json,
                params=params,
                headers=self._headers(access_token),
            )
        except httpx.HTTPError as e:
            logger.error(f"Auth request to {path} failed: {e}")
            raise PlatformError(f"Auth service unreachable: {e}")

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        return str(
            body.get("error_description")
            or body.get("msg")
            or body.get("message")
            or body.get("error")
            or response.reason_phrase
        )

    async def sign_up(self, email: Email, password: str) -> User:
        response = await self._post(
            "/auth/v1/signup", json={"email": email.root, "password": password}
        )
        if response.is_error:
            if response.status_code >= 500:
                raise PlatformError(self._error_message(response), response.status_code)
            raise AuthenticationError(self._error_message(response))

        body = response.json()
        # Returns a session when email confirmation is disabled, a bare user otherwise
        return _user_from_payload(body.get("user") or body)

    async def sign_in(self, email: Email, password: str) -> AuthSession:
        response = await self._post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email.root, "password": password},
        )
        if response.is_error:
            if response.status_code >= 500:
                raise PlatformError(self._error_message(response), response.status_code)
            raise AuthenticationError(self._error_message(response))

        body = response.json()
        return AuthSession(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token"),
            expires_in=int(body.get("expires_in", 3600)),
            user=_user_from_payload(body["user"]),
        )

    async def sign_out(self, access_token: str) -> None:
        response = await self._post("/auth/v1/logout", access_token=access_token)
        if response.is_error and response.status_code != 401:
            logger.warning(f"Sign out failed: {self._error_message(response)}")

    async def get_user(self, access_token: str) -> User | None:
        try:
            response = await self.client.get(
                "/auth/v1/user", headers=self._headers(access_token)
            )
        except httpx.HTTPError as e:
            raise PlatformError(f"Auth service unreachable: {e}")

        if response.status_code in (401, 403):
            return None
        if response.is_error:
            raise PlatformError(self._error_message(response), response.status_code)
        return _user_from_payload(response.json())


# Mock implementation for testing
class MockPlatformAuthClient(AuthClient):
    """Auth client backed by the in-memory store.

    Issues real signed tokens so session checks go through the same
    verification as production.
    """

    def __init__(self, store: InMemoryStore, settings: PlatformSettings) -> None:
        self.store = store
        self.settings = settings
        self._revoked: set[str] = set()

    async def sign_up(self, email: Email, password: str) -> User:
        if self.store.find_user_by_email(email.root):
            raise AuthenticationError("User already registered")

        user = User(
            id=UserId(uuid4()),
            email=email,
            created_at=datetime.now(timezone.utc),
        )
        self.store.users[user.id] = user
        self.store.passwords[email.root] = password
        return user

    async def sign_in(self, email: Email, password: str) -> AuthSession:
        user = self.store.find_user_by_email(email.root)
        if not user or self.store.passwords.get(email.root) != password:
            raise AuthenticationError("Invalid login credentials")

        token = create_token(
            str(user.id), user.email.root, self.settings, timedelta(hours=1)
        )
        return AuthSession(
            access_token=token,
            refresh_token=f"mock-refresh-{uuid4().hex}",
            expires_in=3600,
            user=user,
        )

    async def sign_out(self, access_token: str) -> None:
        self._revoked.add(access_token)

    async def get_user(self, access_token: str) -> User | None:
        if access_token in self._revoked:
            return None
        try:
            payload = verify_token(access_token, self.settings)
            return self.store.users.get(UserId(UUID(payload.user_id)))
        except (JWTError, ValueError, PydanticValidationError):
            return None
