"""Authentication domain service."""

import logfire
from pydantic import ValidationError as PydanticValidationError

from together.domain.error import ValidationError
from together.domain.model.user import AuthSession, User
from together.domain.value import Email

from .base import Service


class AuthClient:
    """Platform authentication API."""

    async def sign_up(self, email: Email, password: str) -> User:
        """Register a new account.

        Raises:
            AuthenticationError: If the platform rejects the registration
        """
        raise NotImplementedError

    async def sign_in(self, email: Email, password: str) -> AuthSession:
        """Exchange credentials for a session.

        Raises:
            AuthenticationError: If the credentials are rejected
        """
        raise NotImplementedError

    async def sign_out(self, access_token: str) -> None:
        """Revoke a session."""
        raise NotImplementedError

    async def get_user(self, access_token: str) -> User | None:
        """Resolve the account behind a session, None if the session is gone."""
        raise NotImplementedError


class AuthService(Service):
    """Domain service for email/password authentication."""

    def __init__(self, auth_client: AuthClient, password_min_length: int = 8) -> None:
        """Initialize auth service.

        Args:
            auth_client: Platform auth client
            password_min_length: Minimum accepted password length
        """
        self.auth_client = auth_client
        self.password_min_length = password_min_length

    def validate_registration(
        self, email: str, password: str, password_confirmation: str
    ) -> Email:
        """Check registration input before any platform call.

        Args:
            email: Raw email
            password: Chosen password
            password_confirmation: Repeated password

        Returns:
            Normalized email

        Raises:
            ValidationError: If the input is rejected
        """
        if not email or not password:
            raise ValidationError("Email and password are required")
        if password != password_confirmation:
            raise ValidationError("Passwords do not match")
        if len(password) < self.password_min_length:
            raise ValidationError(
                f"Password must be at least {self.password_min_length} characters"
            )
        return self.parse_email(email)

    @staticmethod
    def parse_email(email: str) -> Email:
        try:
            return Email(root=email)
        except PydanticValidationError:
            raise ValidationError(f"Invalid email address: {email}")

    async def register(
        self, email: str, password: str, password_confirmation: str
    ) -> User:
        """Validate input and create the account."""
        normalized = self.validate_registration(email, password, password_confirmation)
        with logfire.span("auth_service.register", email=normalized.root):
            user = await self.auth_client.sign_up(normalized, password)
            logfire.info("User registered", user_id=str(user.id))
            return user

    async def login(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        if not email or not password:
            raise ValidationError("Email and password are required")
        normalized = self.parse_email(email)
        with logfire.span("auth_service.login", email=normalized.root):
            session = await self.auth_client.sign_in(normalized, password)
            logfire.info("User signed in", user_id=str(session.user.id))
            return session

    async def logout(self, access_token: str) -> None:
        with logfire.span("auth_service.logout"):
            await self.auth_client.sign_out(access_token)

    async def get_session_user(self, access_token: str) -> User | None:
        """Check a session against the platform."""
        return await self.auth_client.get_user(access_token)
