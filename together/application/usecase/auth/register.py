"""Register use case."""

import logfire
from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.service import AuthService


class RegisterRequest(BaseModel):
    """Registration form."""

    email: str
    password: str
    password_confirmation: str


class RegisterResponse(BaseModel):
    """Created account."""

    user_id: str
    email: str


class RegisterUseCase(BaseUseCase):
    """Use case for creating an email/password account."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(self, request: RegisterRequest) -> RegisterResponse:
        """Validate the form and create the account.

        Raises:
            ValidationError: If the form is rejected before any platform call
            AuthenticationError: If the platform refuses the sign-up
        """
        with logfire.span("register.execute"):
            user = await self.auth_service.register(
                request.email, request.password, request.password_confirmation
            )
            return RegisterResponse(user_id=str(user.id), email=user.email.root)
