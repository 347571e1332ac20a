"""Access token domain service."""

import logfire

from together.config import PlatformSettings
from together.util.jwt import TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Verifies platform-issued session tokens locally."""

    def __init__(self, platform_settings: PlatformSettings) -> None:
        """Initialize JWT service.

        Args:
            platform_settings: Platform settings holding the signing secret
        """
        self.platform_settings = platform_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.platform_settings)
                logfire.debug("JWT token verified", user_id=payload.user_id)
                return payload
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Extract user ID from a token without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token).user_id
        except Exception as e:
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
