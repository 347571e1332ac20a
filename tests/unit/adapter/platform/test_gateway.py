"""Tests for the platform data gateway."""

import json

import httpx
import pytest

from together.adapter.error import PlatformError
from together.adapter.platform.gateway import (
    PlatformGateway,
    ServiceGateway,
    eq,
    in_,
    is_,
)
from together.util.error import ConfigurationError


def _gateway(handler, access_token: str | None = "user-token") -> PlatformGateway:
    client = httpx.AsyncClient(
        base_url="http://platform.test", transport=httpx.MockTransport(handler)
    )
    return PlatformGateway(client, "anon-key", access_token=access_token)


class TestFilters:
    """Tests for filter builders."""

    def test_eq(self):
        assert eq("status", "pending") == ("status", "eq.pending")

    def test_in(self):
        assert in_("id", ["a", "b"]) == ("id", 'in.("a","b")')

    def test_is(self):
        assert is_("read", False) == ("read", "is.false")
        assert is_("deleted_at", None) == ("deleted_at", "is.null")


class TestPlatformGateway:
    """Tests for request building and the {data, error} result."""

    @pytest.mark.asyncio
    async def test_select_sends_filters_and_bearer(self):
        """Selects are sent with the user's token and the API key."""
        # Arrange
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"id": "1", "title": "Groceries"}])

        gateway = _gateway(handler)

        # Act
        result = await gateway.select(
            "lists", filters=[eq("owner_id", "u1")], order="created_at.desc", limit=5
        )

        # Assert
        assert result.ok
        assert result.first() == {"id": "1", "title": "Groceries"}
        request = seen[0]
        assert request.url.path == "/rest/v1/lists"
        assert request.url.params["owner_id"] == "eq.u1"
        assert request.url.params["order"] == "created_at.desc"
        assert request.url.params["limit"] == "5"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["authorization"] == "Bearer user-token"

    @pytest.mark.asyncio
    async def test_anon_key_used_without_session(self):
        # Arrange
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        gateway = _gateway(handler, access_token=None)

        # Act
        result = await gateway.select("invitations")

        # Assert
        assert result.rows() == []
        assert gateway.authenticated is False
        assert seen[0].headers["authorization"] == "Bearer anon-key"

    @pytest.mark.asyncio
    async def test_insert_asks_for_representation(self):
        # Arrange
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json=[json.loads(request.content)])

        gateway = _gateway(handler)

        # Act
        result = await gateway.insert("tasks", {"title": "Milk", "completed": False})

        # Assert
        assert result.first() == {"title": "Milk", "completed": False}
        assert seen[0].method == "POST"
        assert seen[0].headers["prefer"] == "return=representation"

    @pytest.mark.asyncio
    async def test_unique_violation_is_conflict(self):
        """Platform errors come back as data, never raised."""
        # Arrange
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                409,
                json={"code": "23505", "message": "duplicate key value"},
            )

        gateway = _gateway(handler)

        # Act
        result = await gateway.insert("list_members", {"list_id": "l", "user_id": "u"})

        # Assert
        assert not result.ok
        assert result.error.is_conflict
        assert result.error.message == "duplicate key value"
        assert result.rows() == []

    @pytest.mark.asyncio
    async def test_transport_failure_is_error_result(self):
        # Arrange
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        gateway = _gateway(handler)

        # Act
        result = await gateway.rpc("delete_list_cascade", {"list_id": "l"})

        # Assert
        assert not result.ok
        assert "connection refused" in result.error.message
        with pytest.raises(PlatformError):
            result.unwrap()

    @pytest.mark.asyncio
    async def test_empty_body(self):
        # Arrange
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(204)

        gateway = _gateway(handler)

        # Act
        result = await gateway.delete("tasks", [eq("id", "t1")])

        # Assert
        assert result.ok
        assert result.data is None


class TestServiceGateway:
    """Tests for the service-role gateway."""

    @pytest.mark.asyncio
    async def test_sends_service_role_key(self):
        # Arrange
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        client = httpx.AsyncClient(
            base_url="http://platform.test", transport=httpx.MockTransport(handler)
        )
        gateway = ServiceGateway(client, "service-key")

        # Act
        await gateway.select("user_subscriptions")

        # Assert
        assert seen[0].headers["apikey"] == "service-key"
        assert seen[0].headers["authorization"] == "Bearer service-key"

    @pytest.mark.parametrize("key", [None, ""])
    def test_missing_key_is_a_configuration_error(self, key):
        client = httpx.AsyncClient(base_url="http://platform.test")
        with pytest.raises(ConfigurationError):
            ServiceGateway(client, key)
