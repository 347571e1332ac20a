"""Platform infrastructure providers."""

from collections.abc import AsyncIterator

import httpx
from dishka import Scope, provide
from fastapi import Request

from together.adapter.platform.auth import PlatformAuthClient
from together.adapter.platform.gateway import PlatformGateway, ServiceGateway
from together.config import Settings
from together.domain.service import AuthClient
from together.interface.api.session import access_token_from_request
from together.util.di.base import ProviderBase


class PlatformProvider(ProviderBase):
    """Platform component base."""

    __mock_component__ = "platform"


class ProdPlatformProvider(PlatformProvider):
    """Production platform provider talking to the managed backend."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_http_client(self, settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide the shared HTTP client for platform calls."""
        async with httpx.AsyncClient(
            base_url=settings.platform.url,
            timeout=settings.platform.timeout,
        ) as client:
            yield client

    @provide(scope=Scope.APP)
    def get_auth_client(self, client: httpx.AsyncClient, settings: Settings) -> AuthClient:
        """Provide platform auth client."""
        return PlatformAuthClient(client, settings.platform.anon_key)

    @provide(scope=Scope.REQUEST)
    def get_gateway(
        self, client: httpx.AsyncClient, settings: Settings, request: Request
    ) -> PlatformGateway:
        """Provide a gateway bound to the caller's session.

        Without a session the anon key is used and row-level security only
        exposes public rows (such as invitations looked up by token).
        """
        return PlatformGateway(
            client,
            settings.platform.anon_key,
            access_token=access_token_from_request(request, settings.auth.cookie_name),
        )

    @provide(scope=Scope.APP)
    def get_service_gateway(
        self, client: httpx.AsyncClient, settings: Settings
    ) -> ServiceGateway:
        """Provide the service-role gateway used by payment webhooks."""
        return ServiceGateway(client, settings.platform.service_role_key)
