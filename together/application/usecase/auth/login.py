"""Login use case."""

import logfire
from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.service import AuthService


class LoginRequest(BaseModel):
    """Email/password login."""

    email: str
    password: str


class LoginResponse(BaseModel):
    """Login response.

    The token is also set as a cookie by the route; SDK clients send it back
    as a bearer token.
    """

    token: str
    user_id: str
    email: str
    expires_in: int


class LoginUseCase(BaseUseCase):
    """Use case for signing in with email and password."""

    def __init__(self, auth_service: AuthService) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service
        """
        self.auth_service = auth_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Sign in against the platform.

        Raises:
            ValidationError: Missing or malformed credentials
            AuthenticationError: Credentials rejected
        """
        with logfire.span("login.execute"):
            session = await self.auth_service.login(request.email, request.password)
            return LoginResponse(
                token=session.access_token,
                user_id=str(session.user.id),
                email=session.user.email.root,
                expires_in=session.expires_in,
            )
