"""Access token utilities.

The platform signs session tokens with a shared HS256 secret. The API only
needs to verify them locally; the mock auth client also issues them so tests
exercise the same verification path.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from together.config import PlatformSettings


class TokenPayload(BaseModel):
    """Access token payload."""

    sub: str
    email: str | None = None
    exp: datetime
    aud: str | None = None

    @property
    def user_id(self) -> str:
        """Subject of the token, the platform user id."""
        return self.sub


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    email: str,
    settings: PlatformSettings,
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    """Create a signed access token.

    Args:
        user_id: Platform user ID
        email: Account email
        settings: Platform settings holding the signing secret
        expires_in: Token lifetime

    Returns:
        Encoded JWT token
    """
    payload = {
        "sub": user_id,
        "email": email,
        "aud": settings.jwt_audience,
        "role": "authenticated",
        "exp": datetime.now(timezone.utc) + expires_in,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: PlatformSettings) -> TokenPayload:
    """Verify and decode an access token.

    Args:
        token: JWT token to verify
        settings: Platform settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
