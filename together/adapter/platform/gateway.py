"""Managed platform data gateway.

Thin wrapper over the platform's REST query API (PostgREST dialect) and its
stored procedures. Every call returns a ``GatewayResult`` carrying either
``data`` or ``error``; nothing raises across this boundary.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

import httpx
import logfire
from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from together.adapter.error import PlatformError
from together.util.error import ConfigurationError

Filter = tuple[str, str]

UNIQUE_VIOLATION = "23505"


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    return str(value)


def eq(column: str, value: Any) -> Filter:
    """``column = value``. JSON fields use ``data->>key`` as column."""
    return (column, f"eq.{_literal(value)}")


def in_(column: str, values: Iterable[Any]) -> Filter:
    """``column IN (values)``."""
    quoted = ",".join(f'"{_literal(v)}"' for v in values)
    return (column, f"in.({quoted})")


def is_(column: str, value: bool | None) -> Filter:
    """``column IS NULL/TRUE/FALSE``."""
    return (column, f"is.{'null' if value is None else _literal(value)}")


class GatewayError(BaseModel):
    """Error reported by the platform or the transport."""

    message: str
    status_code: int | None = None
    code: str | None = None
    details: Any = None

    @property
    def is_conflict(self) -> bool:
        """Unique constraint violation."""
        return self.code == UNIQUE_VIOLATION or self.status_code == 409


class GatewayResult(BaseModel):
    """Uniform ``{data, error}`` result."""

    data: Any = None
    error: GatewayError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def rows(self) -> list[dict[str, Any]]:
        """Data as a list of rows, empty on error."""
        if self.error is not None or self.data is None:
            return []
        if isinstance(self.data, list):
            return self.data
        return [self.data]

    def first(self) -> dict[str, Any] | None:
        rows = self.rows()
        return rows[0] if rows else None

    def unwrap(self) -> Any:
        """Return ``data`` or raise.

        Raises:
            PlatformError: If the call failed
        """
        if self.error is not None:
            raise PlatformError(self.error.message, self.error.status_code)
        return self.data


class PlatformGateway:
    """Issues queries, mutations and RPC calls against the platform.

    One instance is bound to one bearer token: the signed-in user's access
    token (row-level security applies) or the anon key.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        access_token: str | None = None,
    ) -> None:
        """Initialize gateway.

        Args:
            client: HTTP client with ``base_url`` set to the platform URL
            api_key: Project API key sent with every request
            access_token: Bearer token; defaults to the API key
        """
        self.client = client
        self.api_key = api_key
        self.access_token = access_token

    @property
    def authenticated(self) -> bool:
        return self.access_token is not None

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Sequence[Filter] = (),
        order: str | None = None,
        limit: int | None = None,
    ) -> GatewayResult:
        """Read rows.

        Args:
            table: Table name
            columns: PostgREST select expression, embeds allowed
            filters: Filters built with ``eq``/``in_``/``is_``
            order: ``column.asc`` or ``column.desc``
            limit: Maximum rows
        """
        params: list[tuple[str, str]] = [("select", columns), *filters]
        if order:
            params.append(("order", order))
        if limit is not None:
            params.append(("limit", str(limit)))
        return await self._request("GET", f"/rest/v1/{table}", params=params)

    async def insert(
        self, table: str, rows: dict[str, Any] | list[dict[str, Any]]
    ) -> GatewayResult:
        """Insert rows and return them."""
        return await self._request(
            "POST",
            f"/rest/v1/{table}",
            json=rows,
            prefer="return=representation",
        )

    async def upsert(
        self,
        table: str,
        rows: dict[str, Any] | list[dict[str, Any]],
        on_conflict: str,
    ) -> GatewayResult:
        """Insert rows, merging into existing ones on ``on_conflict`` columns."""
        return await self._request(
            "POST",
            f"/rest/v1/{table}",
            params=[("on_conflict", on_conflict)],
            json=rows,
            prefer="resolution=merge-duplicates,return=representation",
        )

    async def update(
        self, table: str, values: dict[str, Any], filters: Sequence[Filter]
    ) -> GatewayResult:
        """Update matching rows and return them."""
        return await self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=list(filters),
            json=values,
            prefer="return=representation",
        )

    async def delete(self, table: str, filters: Sequence[Filter]) -> GatewayResult:
        """Delete matching rows and return them."""
        return await self._request(
            "DELETE",
            f"/rest/v1/{table}",
            params=list(filters),
            prefer="return=representation",
        )

    async def rpc(self, function: str, params: dict[str, Any]) -> GatewayResult:
        """Call a stored procedure."""
        return await self._request("POST", f"/rest/v1/rpc/{function}", json=params)

    async def _request(
        self,
        method: str,
        path: str,
        params: list[tuple[str, str]] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> GatewayResult:
        try:
            response = await self.client.request(
                method,
                path,
                params=params,
                json=to_jsonable_python(json) if json is not None else None,
                headers=self._headers(prefer),
            )
        except httpx.HTTPError as e:
            logfire.warn("Platform request failed", method=method, path=path, error=str(e))
            return GatewayResult(error=GatewayError(message=str(e) or type(e).__name__))

        if response.is_error:
            error = _parse_error(response)
            logfire.warn(
                "Platform returned error",
                method=method,
                path=path,
                status_code=response.status_code,
                code=error.code,
                error=error.message,
            )
            return GatewayResult(error=error)

        if not response.content:
            return GatewayResult(data=None)

        try:
            return GatewayResult(data=response.json())
        except ValueError:
            return GatewayResult(
                error=GatewayError(
                    message="Malformed platform response",
                    status_code=response.status_code,
                )
            )


class ServiceGateway(PlatformGateway):
    """Gateway authenticated with the service role key.

    Bypasses row-level security; only for server-side flows without a user
    session, such as payment webhooks.
    """

    def __init__(self, client: httpx.AsyncClient, service_role_key: str | None) -> None:
        """Initialize service gateway.

        Raises:
            ConfigurationError: If no service role key is configured
        """
        if not service_role_key:
            raise ConfigurationError(
                "PLATFORM__SERVICE_ROLE_KEY is required for server-side writes"
            )
        super().__init__(client, service_role_key, access_token=service_role_key)


def _parse_error(response: httpx.Response) -> GatewayError:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = (
            body.get("message")
            or body.get("msg")
            or body.get("error_description")
            or body.get("error")
            or response.reason_phrase
        )
        code = body.get("code") or body.get("error_code")
        return GatewayError(
            message=str(message),
            status_code=response.status_code,
            code=str(code) if code is not None else None,
            details=body.get("details"),
        )

    return GatewayError(
        message=response.text or response.reason_phrase,
        status_code=response.status_code,
    )
