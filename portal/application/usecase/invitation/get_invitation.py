"""Get invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from portal.application.usecase.base import BaseUseCase, ensure_authorized
from portal.application.usecase.invitation.common import InvitationItem
from portal.domain.error import AccessDeniedError
from portal.domain.model import TeamIdentity
from portal.domain.service import IdentityResolver, InvitationService, ResourceScope
from portal.domain.value import InvitationId, PrincipalId


class GetInvitationRequest(BaseModel):
    """Get invitation request."""

    principal_id: str
    invitation_id: UUID


class GetInvitationUseCase(BaseUseCase):
    """Use case for reading one invitation (admins and moderators)."""

    def __init__(
        self,
        invitation_service: InvitationService,
        identity_resolver: IdentityResolver,
    ) -> None:
        self.invitation_service = invitation_service
        self.identity_resolver = identity_resolver

    async def execute(self, request: GetInvitationRequest) -> InvitationItem:
        caller = await self.identity_resolver.resolve(
            PrincipalId(UUID(request.principal_id))
        )
        ensure_authorized(caller, "/invitations", ResourceScope.TEAM)
        if not isinstance(caller, TeamIdentity) or not caller.can_invite:
            raise AccessDeniedError("insufficient_role")

        invitation = await self.invitation_service.get(
            InvitationId(request.invitation_id)
        )
        return InvitationItem.from_invitation(invitation)
