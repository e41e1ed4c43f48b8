"""Invitation use cases."""

from portal.application.usecase.invitation.accept_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from portal.application.usecase.invitation.common import InvitationItem
from portal.application.usecase.invitation.create_invitation import (
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
)
from portal.application.usecase.invitation.get_invitation import (
    GetInvitationRequest,
    GetInvitationUseCase,
)
from portal.application.usecase.invitation.list_invitations import (
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
)
from portal.application.usecase.invitation.manage_invitation import (
    ManageInvitationRequest,
    ManageInvitationResponse,
    ManageInvitationUseCase,
)
from portal.application.usecase.invitation.preview_invitation import (
    PreviewInvitationRequest,
    PreviewInvitationResponse,
    PreviewInvitationUseCase,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "CreateInvitationRequest",
    "CreateInvitationResponse",
    "CreateInvitationUseCase",
    "GetInvitationRequest",
    "GetInvitationUseCase",
    "InvitationItem",
    "ListInvitationsRequest",
    "ListInvitationsResponse",
    "ListInvitationsUseCase",
    "ManageInvitationRequest",
    "ManageInvitationResponse",
    "ManageInvitationUseCase",
    "PreviewInvitationRequest",
    "PreviewInvitationResponse",
    "PreviewInvitationUseCase",
]
