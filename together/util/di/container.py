"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from together.config import Settings
from together.util.di import PROVIDERS, get_provider
from together.util.error import ConfigurationError

# Secrets the webhook and checkout flows cannot run without
_DEPLOYED_SECRETS = (
    ("PLATFORM__SERVICE_ROLE_KEY", lambda s: s.platform.service_role_key),
    ("PAYMENT__SECRET_KEY", lambda s: s.payment.secret_key),
    ("PAYMENT__WEBHOOK_SECRET", lambda s: s.payment.webhook_secret),
)


def check_deployed_settings(settings: Settings) -> None:
    """Refuse to build a staging or production container without its secrets.

    Development keeps working without payments; the affected routes then
    fail on first use instead.

    Raises:
        ConfigurationError: If a deployed environment lacks a required secret
    """
    if settings.environment not in ("staging", "production"):
        return
    missing = [name for name, read in _DEPLOYED_SECRETS if not read(settings)]
    if missing:
        raise ConfigurationError(
            f"Missing {settings.environment} configuration: {', '.join(missing)}"
        )


def create_container(settings: Settings | None = None) -> AsyncContainer:
    """Build production container (all prod implementations).

    Args:
        settings: Checked before the container is built; loaded from the
            environment when omitted

    Returns:
        Configured DI container with production providers
    """
    check_deployed_settings(settings or Settings())
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    # FastapiProvider exposes the current Request to request-scoped providers
    return make_async_container(*provider_instances, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Setup dependency injection for FastAPI.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)
