"""Create invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from portal.application.usecase.base import BaseUseCase, ensure_authorized
from portal.application.usecase.invitation.common import InvitationItem
from portal.domain.service import IdentityResolver, InvitationService, ResourceScope
from portal.domain.value import EmailAddress, InvitationRole, PrincipalId


class CreateInvitationRequest(BaseModel):
    """Create invitation request."""

    principal_id: str  # Caller, from the validated session
    email: str
    full_name: str = Field(min_length=1, max_length=255)
    role: InvitationRole
    company_name: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)


class CreateInvitationResponse(BaseModel):
    """Create invitation response."""

    invitation: InvitationItem
    message: str = "Invitation sent successfully"


class CreateInvitationUseCase(BaseUseCase):
    """Use case for inviting a team member or client contact."""

    def __init__(
        self,
        invitation_service: InvitationService,
        identity_resolver: IdentityResolver,
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
            identity_resolver: Resolves the caller's identity
        """
        self.invitation_service = invitation_service
        self.identity_resolver = identity_resolver

    async def execute(
        self, request: CreateInvitationRequest
    ) -> CreateInvitationResponse:
        """Execute create invitation use case.

        Raises:
            AccessDeniedError: If the caller is not a team admin or moderator
            pydantic.ValidationError: If the email is malformed
        """
        email = EmailAddress(request.email)

        with logfire.span("create_invitation.execute", role=request.role.value):
            caller = await self.identity_resolver.resolve(
                PrincipalId(UUID(request.principal_id))
            )
            ensure_authorized(caller, "/invitations", ResourceScope.TEAM)

            invitation = await self.invitation_service.create(
                email=email,
                full_name=request.full_name.strip(),
                role=request.role,
                invited_by=caller,
                company_name=request.company_name,
                phone=request.phone,
            )

            return CreateInvitationResponse(
                invitation=InvitationItem.from_invitation(invitation)
            )
