"""Shared plumbing for platform-backed repositories."""

from typing import Any

from together.adapter.error import PlatformError
from together.adapter.platform.gateway import GatewayResult, PlatformGateway
from together.domain.error import ConflictError, RepositoryError


class PlatformRepository:
    """Base for repositories that talk to the platform gateway."""

    def __init__(self, gateway: PlatformGateway) -> None:
        """Initialize repository with a gateway.

        Args:
            gateway: Gateway bound to the caller's session
        """
        self.gateway = gateway

    @staticmethod
    def _unwrap(operation: str, result: GatewayResult) -> Any:
        """Return ``result.data`` or raise the matching domain error.

        Raises:
            ConflictError: On unique constraint violations
            RepositoryError: On any other failure
        """
        try:
            return result.unwrap()
        except PlatformError as e:
            if result.error is not None and result.error.is_conflict:
                raise ConflictError(str(e))
            raise RepositoryError(operation, str(e))

    def _rows(self, operation: str, result: GatewayResult) -> list[dict[str, Any]]:
        self._unwrap(operation, result)
        return result.rows()
