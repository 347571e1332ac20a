"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Input rejected before any platform call."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user acts on a list they don't belong to."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to access {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write collides with an existing row."""

    pass


class AuthenticationError(DomainError):
    """Raised when credentials are rejected by the platform."""

    pass


class InvitationError(DomainError):
    """Base invitation lifecycle error."""

    code: str = "invitation_error"


class InvitationInvalidError(InvitationError):
    """Token unknown, invitation expired, or its list is gone."""

    code = "invalid_or_expired"

    def __init__(self, message: str = "Invitation is invalid or has expired"):
        super().__init__(message)


class InvitationClosedError(InvitationError):
    """Invitation already reached a terminal state that forbids the action."""

    code = "invitation_closed"

    def __init__(self, invitation_id: str, status: str):
        self.invitation_id = invitation_id
        self.status = status
        super().__init__(f"Invitation {invitation_id} is already {status}")


class AcceptStepError(InvitationError):
    """One step of invitation acceptance failed.

    ``step`` names the failing step so a membership failure is never
    reported as an invitation update failure.
    """

    code = "accept_failed"

    def __init__(self, step: str, message: str):
        self.step = step
        super().__init__(f"{step}: {message}")


class WebhookEventError(DomainError):
    """Webhook payload could not be applied."""

    pass


class RepositoryError(DomainError):
    """The storage backend failed to answer a query."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")
