"""Shared invitation response models."""

from datetime import datetime

from pydantic import BaseModel

from portal.domain.model import Invitation
from portal.domain.value import InvitationRole, InvitationStatus


class InvitationItem(BaseModel):
    """Invitation as returned to team members (the token is never exposed)."""

    id: str
    email: str
    full_name: str
    role: InvitationRole
    company_name: str | None
    client_company_id: str | None
    phone: str | None
    invited_by: str
    status: InvitationStatus
    expires_at: datetime
    created_at: datetime
    updated_at: datetime
    accepted_at: datetime | None

    @classmethod
    def from_invitation(cls, invitation: Invitation) -> "InvitationItem":
        return cls(
            id=str(invitation.id),
            email=str(invitation.email),
            full_name=invitation.full_name,
            role=invitation.role,
            company_name=invitation.company_name,
            client_company_id=(
                str(invitation.client_company_id)
                if invitation.client_company_id
                else None
            ),
            phone=invitation.phone,
            invited_by=str(invitation.invited_by),
            status=invitation.status,
            expires_at=invitation.expires_at,
            created_at=invitation.created_at,
            updated_at=invitation.updated_at,
            accepted_at=invitation.accepted_at,
        )
