"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Response, status
from pydantic import BaseModel

from together.application.usecase.auth import (
    GetCurrentUserUseCase,
    LoginUseCase,
    LogoutUseCase,
    RegisterUseCase,
)
from together.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from together.application.usecase.auth.login import LoginRequest
from together.application.usecase.auth.logout import LogoutRequest
from together.application.usecase.auth.register import (
    RegisterRequest,
    RegisterResponse,
)
from together.config import Settings
from together.domain.error import AuthenticationError
from together.interface.api.guard import resolve_post_login_redirect
from together.interface.api.session import bearer_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["authentication"], route_class=DishkaRoute)


class LoginAPIRequest(BaseModel):
    """Email/password login, with the page to return to afterwards."""

    email: str
    password: str
    redirect: str | None = None


class LoginAPIResponse(BaseModel):
    """Login response.

    ``token`` is for SDK clients that send it as a bearer token; browsers
    use the cookie.
    """

    token: str
    user_id: str
    email: str
    expires_in: int
    redirect_to: str


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class AuthStatusResponse(BaseModel):
    """Response for checking authentication status.

    Returns the current user if authenticated, or ``authenticated=false``
    without raising an error.
    """

    authenticated: bool
    user: GetCurrentUserResponse | None = None


def _cookie_options(settings: Settings) -> dict:
    # Cross-site cookies in production require samesite=none with secure
    is_production = settings.environment == "production"
    return {
        "httponly": True,
        "secure": is_production,
        "samesite": "none" if is_production else "lax",
        "path": "/",
    }


@router.post(
    "/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    request: RegisterRequest,
    register_use_case: FromDishka[RegisterUseCase],
) -> RegisterResponse:
    """Create an email/password account.

    The form is validated before any platform call: the passwords must
    match and meet the minimum length, and the email must look plausible.
    """
    return await register_use_case.execute(request)


@router.post("/login", response_model=LoginAPIResponse)
async def login(
    request: LoginAPIRequest,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
) -> LoginAPIResponse:
    """Sign in and set the session cookie.

    Args:
        request: Credentials and optional post-login redirect
        response: FastAPI response object
        login_use_case: Login use case from DI
        settings: Application settings from DI

    Returns:
        Session token and where the browser should go next

    Raises:
        AuthenticationError: If the platform rejects the credentials (401)
    """
    result = await login_use_case.execute(
        LoginRequest(email=request.email, password=request.password)
    )

    cookie_max_age = settings.auth.cookie_max_age_days * 24 * 60 * 60
    options = _cookie_options(settings)
    logger.info(
        f"Setting auth cookie: environment={settings.environment}, "
        f"secure={options['secure']}, samesite={options['samesite']}, "
        f"max_age={cookie_max_age}"
    )
    response.set_cookie(
        key=settings.auth.cookie_name,
        value=result.token,
        max_age=cookie_max_age,
        **options,
    )

    return LoginAPIResponse(
        token=result.token,
        user_id=result.user_id,
        email=result.email,
        expires_in=result.expires_in,
        redirect_to=resolve_post_login_redirect(
            request.redirect, settings.guard.dashboard_path
        ),
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    logout_use_case: FromDishka[LogoutUseCase],
    settings: FromDishka[Settings],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> LogoutResponse:
    """End the platform session and clear the cookie.

    Always succeeds locally even when the platform call fails.
    """
    token = auth_token or bearer_token(authorization)
    if token:
        try:
            await logout_use_case.execute(LogoutRequest(token=token))
        except Exception as e:
            logger.warning(f"Platform sign out failed: {e}")

    response.delete_cookie(
        key=settings.auth.cookie_name,
        path="/",
        secure=_cookie_options(settings)["secure"],
        httponly=True,
    )
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> AuthStatusResponse:
    """Get current user if authenticated, or return unauthenticated status.

    Safe to call without a session; the session is checked against the
    platform, so a token revoked by logout reports ``authenticated=false``.
    """
    token = auth_token or bearer_token(authorization)
    if not token:
        return AuthStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=token)
        )
        return AuthStatusResponse(authenticated=True, user=user)
    except AuthenticationError:
        return AuthStatusResponse(authenticated=False)
