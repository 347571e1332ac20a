"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlatformSettings(BaseModel):
    """Managed backend platform configuration.

    The platform owns all durable state: accounts, lists, tasks, invitations,
    notifications and subscriptions. ``url`` and ``anon_key`` are required;
    the application refuses to start without them.
    """

    url: str = ""
    anon_key: str = ""

    # Only used by the payment webhook, which runs without a user session
    service_role_key: str | None = None

    # Secret the platform signs its access tokens with
    jwt_secret: str = "CHANGE_ME_IN_PRODUCTION"
    jwt_algorithm: str = "HS256"
    jwt_audience: str = "authenticated"

    # Seconds before outbound platform calls give up
    timeout: float = 10.0


class PaymentSettings(BaseModel):
    """Payment provider configuration."""

    secret_key: str | None = None
    webhook_secret: str | None = None

    # Public price identifiers shown on the upgrade page
    monthly_price_id: str | None = None
    yearly_price_id: str | None = None

    api_base: str = "https://api.stripe.com"

    # Maximum age of a signed webhook payload
    signature_tolerance_seconds: int = 300

    # Plan names in the subscription_plans table
    pro_plan_name: str = "Pro"
    free_plan_name: str = "Free"


class AuthSettings(BaseModel):
    """Session and registration configuration."""

    cookie_name: str = "auth_token"
    cookie_max_age_days: int = 7
    password_min_length: int = 8


class InvitationSettings(BaseModel):
    """Invitation configuration."""

    # Invitations stay usable for this many days after creation
    expiry_days: int = 7

    # Path of the page that accepts an invitation token
    accept_path: str = "/accept-invite"


class RouteGuardSettings(BaseModel):
    """Route guard configuration.

    Protected prefixes require a session; auth pages redirect signed-in
    users to the dashboard.
    """

    protected_prefixes: list[str] = ["/dashboard", "/list", "/pro", "/settings"]
    auth_prefix: str = "/auth"
    login_path: str = "/auth/login"
    dashboard_path: str = "/dashboard"


class APISettings(BaseModel):
    """API configuration."""

    host: str
    port: int
    protocol: Literal["http", "https"]
    frontend_host: str

    @computed_field
    @property
    def base_url(self) -> str:
        """Base URL for this API server.

        In development: http://localhost:8000
        """
        if self.host == "localhost":
            return f"{self.protocol}://{self.host}:{self.port}"
        else:
            return f"{self.protocol}://{self.host}"

    @computed_field
    @property
    def frontend_url(self) -> str:
        """Origin used when building links that users open in a browser.

        In development: http://localhost:3000
        """
        if self.frontend_host == "localhost":
            return "http://localhost:3000"
        else:
            return f"{self.protocol}://{self.frontend_host}"


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    logfire_token: str | None = None

    # If None, sends only when a token is present
    send_to_logfire: bool | None = None

    # Overrides the level derived from DEBUG, e.g. "WARNING"
    log_level: str | None = None

    # Log each guard redirect; noisy on busy deployments
    log_guard_redirects: bool = True


class Settings(BaseSettings):
    """Application settings.

    Nested values are read from the environment with ``__`` as delimiter:

        PLATFORM__URL=https://xyz.supabase.co
        PLATFORM__ANON_KEY=...
        PAYMENT__WEBHOOK_SECRET=whsec_...
        FRONTEND_HOST=listtogether.app
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows PLATFORM__URL syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Git commit SHA (loaded from version.txt file or defaults to "unknown")
    git_sha: str = "unknown"

    host: str = "localhost"
    port: int = 8000
    frontend_host: str = "localhost"

    # Nested settings
    platform: PlatformSettings = PlatformSettings()
    payment: PaymentSettings = PaymentSettings()
    auth: AuthSettings = AuthSettings()
    invitations: InvitationSettings = InvitationSettings()
    guard: RouteGuardSettings = RouteGuardSettings()
    api: APISettings = APISettings(
        host="localhost", port=8000, protocol="http", frontend_host="localhost"
    )  # Overwritten in validator
    observability: ObservabilitySettings = ObservabilitySettings()

    @model_validator(mode="after")
    def require_platform_credentials(self) -> "Settings":
        """Fail fast when the platform cannot be reached."""
        missing = [
            name
            for name, value in (
                ("PLATFORM__URL", self.platform.url),
                ("PLATFORM__ANON_KEY", self.platform.anon_key),
            )
            if not value
        ]
        if missing:
            raise ValueError(
                f"Missing required platform configuration: {', '.join(missing)}"
            )
        return self

    @model_validator(mode="after")
    def initialize_api_settings(self) -> "Settings":
        """Initialize API settings from host and environment."""
        protocol: Literal["http", "https"] = (
            "http" if self.environment in ("test", "development") else "https"
        )

        self.api = APISettings(
            host=self.host,
            port=self.port,
            protocol=protocol,
            frontend_host=self.frontend_host,
        )

        self.git_sha = self._load_git_sha()

        return self

    @staticmethod
    def _load_git_sha() -> str:
        """Load git SHA from version file.

        Returns:
            Git SHA if version file exists, otherwise "unknown"
        """
        version_file = Path("/app/version.txt")
        if version_file.exists():
            try:
                return version_file.read_text().strip()
            except OSError:
                return "unknown"
        return "unknown"

    @property
    def invite_link_base(self) -> str:
        """Absolute URL of the invitation acceptance page."""
        return f"{self.api.frontend_url}{self.invitations.accept_path}"
