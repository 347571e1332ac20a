"""Session extraction and authentication for routes."""

from fastapi import HTTPException, Request, status

from together.domain.service import JWTService
from together.util.jwt import JWTError, TokenPayload

COOKIE_NAME = "auth_token"


def bearer_token(authorization: str | None) -> str | None:
    """Token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def access_token_from_request(request: Request, cookie_name: str = COOKIE_NAME) -> str | None:
    """Session token from the cookie, falling back to a bearer header."""
    return request.cookies.get(cookie_name) or bearer_token(
        request.headers.get("authorization")
    )


def authenticate(
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None = None,
) -> TokenPayload:
    """Verify the session of a request.

    Args:
        jwt_service: JWT service from DI
        auth_token: Token from the session cookie
        authorization: Raw Authorization header, used when there is no cookie

    Returns:
        Verified token payload

    Raises:
        HTTPException: 401 if no session or the token is invalid
    """
    token = auth_token or bearer_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        return jwt_service.verify_token(token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
