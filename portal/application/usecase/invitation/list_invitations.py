"""List invitations use case."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from portal.application.usecase.base import BaseUseCase, ensure_authorized
from portal.application.usecase.invitation.common import InvitationItem
from portal.domain.model import InvitationStats
from portal.domain.service import IdentityResolver, InvitationService, ResourceScope
from portal.domain.value import InvitationStatus, PrincipalId


class ListInvitationsRequest(BaseModel):
    """List invitations request."""

    principal_id: str
    status: InvitationStatus | Literal["all"] = InvitationStatus.PENDING
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListInvitationsResponse(BaseModel):
    """List invitations response."""

    invitations: list[InvitationItem]
    stats: InvitationStats


class ListInvitationsUseCase(BaseUseCase):
    """Admin overview of invitations with per-status counts."""

    def __init__(
        self,
        invitation_service: InvitationService,
        identity_resolver: IdentityResolver,
    ) -> None:
        self.invitation_service = invitation_service
        self.identity_resolver = identity_resolver

    async def execute(self, request: ListInvitationsRequest) -> ListInvitationsResponse:
        caller = await self.identity_resolver.resolve(
            PrincipalId(UUID(request.principal_id))
        )
        ensure_authorized(caller, "/invitations", ResourceScope.ADMIN)

        status = None if request.status == "all" else InvitationStatus(request.status)
        invitations, stats = await self.invitation_service.list_invitations(
            status=status, limit=request.limit, offset=request.offset
        )
        return ListInvitationsResponse(
            invitations=[InvitationItem.from_invitation(inv) for inv in invitations],
            stats=stats,
        )
