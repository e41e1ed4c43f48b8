"""Accept invitation use case."""

import logfire
from pydantic import BaseModel

from portal.application.usecase.auth.common import IdentitySummary
from portal.application.usecase.base import BaseUseCase
from portal.domain.service import InvitationService
from portal.domain.value import InvitationToken


class AcceptInvitationRequest(BaseModel):
    """Accept invitation request."""

    token: str
    password: str
    confirm_password: str | None = None


class AcceptInvitationResponse(BaseModel):
    """Accept invitation response."""

    message: str = "Account created successfully"
    user: IdentitySummary


class AcceptInvitationUseCase(BaseUseCase):
    """Use case for accepting an invitation and creating the account."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: AcceptInvitationRequest
    ) -> AcceptInvitationResponse:
        token = InvitationToken(request.token)
        with logfire.span("accept_invitation.execute", token=token.redacted()):
            identity = await self.invitation_service.accept(
                token, request.password, request.confirm_password
            )
            return AcceptInvitationResponse(
                user=IdentitySummary.from_identity(identity)
            )
