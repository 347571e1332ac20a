"""Route guard for page navigations.

Decides, from session presence alone, whether a navigation proceeds or is
redirected. Data access is still authorized by the platform; the guard only
keeps signed-out users away from pages that would render empty.
"""

import logging
from dataclasses import dataclass
from urllib.parse import quote, urlencode, urlsplit

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from together.config import PlatformSettings, RouteGuardSettings
from together.interface.api.session import COOKIE_NAME, access_token_from_request
from together.util.jwt import JWTError, verify_token

logger = logging.getLogger(__name__)

# Unresolved route template left in links by the list page
_LIST_PLACEHOLDER = "[listId]"


@dataclass(frozen=True)
class GuardDecision:
    """``location`` is set when the navigation must be redirected."""

    location: str | None = None

    @property
    def allowed(self) -> bool:
        return self.location is None


ALLOW = GuardDecision()


def _matches(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def resolve_post_login_redirect(redirect: str | None, default: str) -> str:
    """Where to send a user after signing in.

    Only same-site relative paths are honored so the ``redirect`` parameter
    cannot be used to bounce users to another origin.
    """
    if not redirect or not redirect.startswith("/") or redirect.startswith("//"):
        return default
    if urlsplit(redirect).netloc or "\\" in redirect:
        return default
    return redirect


class RouteGuard:
    """Static prefix table plus the redirect rules."""

    def __init__(self, settings: RouteGuardSettings) -> None:
        self.settings = settings

    def is_protected(self, path: str) -> bool:
        return any(_matches(path, p) for p in self.settings.protected_prefixes)

    def is_auth_page(self, path: str) -> bool:
        return _matches(path, self.settings.auth_prefix)

    def login_url(self, path: str, query: str = "") -> str:
        """Login page carrying the original path and query as ``redirect``."""
        target = f"{path}?{query}" if query else path
        return f"{self.settings.login_path}?{urlencode({'redirect': target}, quote_via=quote)}"

    def decide(self, path: str, query: str, authenticated: bool) -> GuardDecision:
        """Decide one navigation.

        Args:
            path: Request path
            query: Raw query string without ``?``
            authenticated: Whether the request carries a valid session

        Returns:
            ALLOW, or a decision carrying the redirect location
        """
        if path.startswith("/list/"):
            list_id = path.split("/")[2]
            if not list_id or list_id == _LIST_PLACEHOLDER:
                return GuardDecision(self.settings.dashboard_path)

        if not authenticated and self.is_protected(path):
            return GuardDecision(self.login_url(path, query))

        if authenticated and self.is_auth_page(path):
            return GuardDecision(self.settings.dashboard_path)

        return ALLOW


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Applies ``RouteGuard`` to GET navigations.

    The session check is a local signature check of the session token. It
    runs once per navigation and is never retried.
    """

    def __init__(
        self,
        app: ASGIApp,
        guard: RouteGuard,
        platform_settings: PlatformSettings,
        cookie_name: str = COOKIE_NAME,
    ) -> None:
        super().__init__(app)
        self.guard = guard
        self.platform_settings = platform_settings
        self.cookie_name = cookie_name

    def _authenticated(self, request: Request) -> bool:
        token = access_token_from_request(request, self.cookie_name)
        if not token:
            return False
        try:
            verify_token(token, self.platform_settings)
        except JWTError:
            return False
        return True

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method != "GET":
            return await call_next(request)

        decision = self.guard.decide(
            request.url.path,
            request.url.query,
            self._authenticated(request),
        )
        if decision.allowed:
            return await call_next(request)

        logger.info(f"Guard redirect {request.url.path} -> {decision.location}")
        return RedirectResponse(url=decision.location, status_code=307)
