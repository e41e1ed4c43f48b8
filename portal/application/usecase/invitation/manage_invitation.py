"""Manage invitation use case (resend, extend, cancel)."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from portal.application.usecase.base import BaseUseCase, ensure_authorized
from portal.application.usecase.invitation.common import InvitationItem
from portal.domain.error import AccessDeniedError
from portal.domain.model import TeamIdentity
from portal.domain.service import IdentityResolver, InvitationService, ResourceScope
from portal.domain.value import InvitationAction, InvitationId, PrincipalId

_MESSAGES = {
    InvitationAction.RESEND: "Invitation resent successfully",
    InvitationAction.EXTEND: "Invitation extended successfully",
    InvitationAction.CANCEL: "Invitation cancelled successfully",
}


class ManageInvitationRequest(BaseModel):
    """Manage invitation request."""

    principal_id: str
    invitation_id: UUID
    action: InvitationAction


class ManageInvitationResponse(BaseModel):
    """Manage invitation response."""

    message: str
    invitation: InvitationItem


class ManageInvitationUseCase(BaseUseCase):
    """Applies an administrative action to a pending invitation."""

    def __init__(
        self,
        invitation_service: InvitationService,
        identity_resolver: IdentityResolver,
    ) -> None:
        self.invitation_service = invitation_service
        self.identity_resolver = identity_resolver

    async def execute(
        self, request: ManageInvitationRequest
    ) -> ManageInvitationResponse:
        """Execute the requested action.

        Raises:
            AccessDeniedError: If the caller is not a team admin or moderator
            InvitationNotFoundError: If the invitation does not exist
            InvitationNotPendingError: If the invitation is not pending
            InvitationDeliveryError: If a resend could not be delivered
        """
        with logfire.span(
            "manage_invitation.execute",
            invitation_id=str(request.invitation_id),
            action=request.action.value,
        ):
            caller = await self.identity_resolver.resolve(
                PrincipalId(UUID(request.principal_id))
            )
            ensure_authorized(caller, "/invitations", ResourceScope.TEAM)
            if not isinstance(caller, TeamIdentity) or not caller.can_invite:
                raise AccessDeniedError("insufficient_role")

            invitation_id = InvitationId(request.invitation_id)
            if request.action == InvitationAction.RESEND:
                invitation = await self.invitation_service.resend(invitation_id, caller)
            elif request.action == InvitationAction.EXTEND:
                invitation = await self.invitation_service.extend(invitation_id)
            else:
                invitation = await self.invitation_service.cancel(invitation_id)

            return ManageInvitationResponse(
                message=_MESSAGES[request.action],
                invitation=InvitationItem.from_invitation(invitation),
            )
