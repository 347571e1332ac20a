"""Get current user use case."""

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.error import AuthenticationError
from together.domain.service import AuthService


class GetCurrentUserRequest(BaseModel):
    """Access token of the session to check."""

    token: str


class GetCurrentUserResponse(BaseModel):
    """Signed-in user."""

    user_id: str
    email: str
    display_name: str


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for checking a session against the platform."""

    def __init__(self, auth_service: AuthService) -> None:
        """Initialize get current user use case.

        Args:
            auth_service: Authentication domain service
        """
        self.auth_service = auth_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Resolve the session's user.

        Raises:
            AuthenticationError: If the session is no longer valid
        """
        user = await self.auth_service.get_session_user(request.token)
        if user is None:
            raise AuthenticationError("Session expired")

        return GetCurrentUserResponse(
            user_id=str(user.id),
            email=user.email.root,
            display_name=user.display_name,
        )
