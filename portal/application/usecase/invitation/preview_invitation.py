"""Preview invitation use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from portal.domain.service import InvitationService
from portal.domain.value import InvitationRole, InvitationToken


class PreviewInvitationRequest(BaseModel):
    """Preview invitation request."""

    token: str


class PreviewInvitationResponse(BaseModel):
    """What the acceptance page shows before the invitee sets a password."""

    email: str
    full_name: str
    role: InvitationRole
    company_name: str | None
    expires_at: datetime


class PreviewInvitationUseCase:
    """Use case for validating an invitation token.

    Lets the acceptance page check a link before asking for a password.
    No session is required.
    """

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: PreviewInvitationRequest
    ) -> PreviewInvitationResponse:
        """Validate the token and return the invitation preview.

        Raises:
            InvalidTokenError: If no invitation has the token
            InvitationNotPendingError: If the invitation is no longer pending
            InvitationExpiredError: If the invitation has expired
        """
        token = InvitationToken(request.token)
        with logfire.span("preview_invitation.execute", token=token.redacted()):
            invitation = await self.invitation_service.validate(token)
            return PreviewInvitationResponse(
                email=str(invitation.email),
                full_name=invitation.full_name,
                role=invitation.role,
                company_name=invitation.company_name,
                expires_at=invitation.expires_at,
            )
