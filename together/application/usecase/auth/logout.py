"""Logout use case."""

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase
from together.domain.service import AuthService


class LogoutRequest(BaseModel):
    token: str


class LogoutUseCase(BaseUseCase):
    """Use case for ending a platform session."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(self, request: LogoutRequest) -> None:
        await self.auth_service.logout(request.token)
