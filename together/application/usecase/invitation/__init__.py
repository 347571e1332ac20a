"""Invitation use cases."""

from together.application.usecase.invitation.accept_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from together.application.usecase.invitation.create_invitation import (
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
    InvitationItem,
)
from together.application.usecase.invitation.reject_invitation import (
    RejectInvitationRequest,
    RejectInvitationResponse,
    RejectInvitationUseCase,
)
from together.application.usecase.invitation.resolve_invitation import (
    ResolveInvitationRequest,
    ResolveInvitationResponse,
    ResolveInvitationUseCase,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "CreateInvitationRequest",
    "CreateInvitationResponse",
    "CreateInvitationUseCase",
    "InvitationItem",
    "RejectInvitationRequest",
    "RejectInvitationResponse",
    "RejectInvitationUseCase",
    "ResolveInvitationRequest",
    "ResolveInvitationResponse",
    "ResolveInvitationUseCase",
]
