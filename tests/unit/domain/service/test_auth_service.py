"""Unit tests for AuthService."""

import pytest

from together.domain.error import AuthenticationError, ValidationError
from together.domain.service import AuthService
from together.persistence.repository.inmemory import InMemoryStore
from tests.harness import create_env_fixture, make_user

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestRegistration:
    """Tests for registration input checks."""

    @pytest.mark.asyncio
    async def test_register_normalizes_email(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(AuthService)

        # Act
        user = await service.register("Carol@Example.com", "password123", "password123")

        # Assert
        assert user.email.root == "carol@example.com"
        assert store.find_user_by_email("carol@example.com") is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password,confirmation",
        [
            ("", "password123", "password123"),
            ("carol@example.com", "password123", "password124"),
            ("carol@example.com", "short", "short"),
            ("not-an-email", "password123", "password123"),
        ],
    )
    async def test_invalid_input_never_reaches_platform(
        self, unit_env, email, password, confirmation
    ):
        """Rejected input creates no account."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(AuthService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.register(email, password, confirmation)
        assert store.users == {}

    @pytest.mark.asyncio
    async def test_duplicate_registration(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        make_user(store, "carol@example.com")
        service = await unit_env.get(AuthService)

        # Act & Assert
        with pytest.raises(AuthenticationError):
            await service.register("carol@example.com", "password123", "password123")


class TestLogin:
    """Tests for login and session lookups."""

    @pytest.mark.asyncio
    async def test_login_issues_session(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        carol = make_user(store, "carol@example.com")
        service = await unit_env.get(AuthService)

        # Act
        session = await service.login("carol@example.com", "password123")
        user = await service.get_session_user(session.access_token)

        # Assert
        assert session.user.id == carol.id
        assert user is not None
        assert user.id == carol.id

    @pytest.mark.asyncio
    async def test_wrong_password(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        make_user(store, "carol@example.com")
        service = await unit_env.get(AuthService)

        # Act & Assert
        with pytest.raises(AuthenticationError):
            await service.login("carol@example.com", "wrong-password")

    @pytest.mark.asyncio
    async def test_logout_revokes_session(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        make_user(store, "carol@example.com")
        service = await unit_env.get(AuthService)
        session = await service.login("carol@example.com", "password123")

        # Act
        await service.logout(session.access_token)

        # Assert
        assert await service.get_session_user(session.access_token) is None
