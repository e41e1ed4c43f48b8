"""Test configuration and shared factories."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from portal.domain.model import ClientCompany, ClientContact, Invitation, TeamIdentity
from portal.domain.value import (
    ClientCompanyId,
    CompanyStatus,
    EmailAddress,
    InvitationId,
    InvitationRole,
    InvitationStatus,
    InvitationToken,
    PrincipalId,
    TeamRole,
)


def make_team(
    role: TeamRole = TeamRole.ADMIN,
    email: str | None = None,
    full_name: str = "Ada Admin",
) -> TeamIdentity:
    """Build a team identity with a fresh principal id."""
    principal_id = PrincipalId(uuid4())
    return TeamIdentity(
        id=principal_id,
        email=EmailAddress(email or f"team-{principal_id.hex[:8]}@example.com"),
        full_name=full_name,
        role=role,
    )


def make_company(
    name: str = "Acme Corp", status: CompanyStatus = CompanyStatus.ACTIVE
) -> ClientCompany:
    """Build a client company."""
    return ClientCompany(id=ClientCompanyId(uuid4()), name=name, status=status)


def make_contact(
    company: ClientCompany,
    email: str | None = None,
    can_manage_team: bool = False,
    principal_id: PrincipalId | None = None,
) -> ClientContact:
    """Build a client contact belonging to ``company``."""
    principal_id = principal_id or PrincipalId(uuid4())
    return ClientContact(
        id=principal_id,
        email=EmailAddress(email or f"client-{principal_id.hex[:8]}@acme.com"),
        full_name="Carla Client",
        client_company_id=company.id,
        can_manage_team=can_manage_team,
    )


def make_invitation(
    email: str = "invitee@example.com",
    role: InvitationRole = InvitationRole.TEAM_MEMBER,
    status: InvitationStatus = InvitationStatus.PENDING,
    expires_in: timedelta = timedelta(days=7),
    company_name: str | None = None,
    invited_by: PrincipalId | None = None,
    token: str | None = None,
) -> Invitation:
    """Build an invitation; a negative ``expires_in`` makes it stale."""
    now = datetime.now(timezone.utc)
    return Invitation(
        id=InvitationId(uuid4()),
        email=EmailAddress(email),
        full_name="Ivy Invitee",
        role=role,
        company_name=company_name,
        invited_by=invited_by or PrincipalId(uuid4()),
        invitation_token=InvitationToken(token or f"token-{uuid4().hex}"),
        status=status,
        expires_at=now + expires_in,
        created_at=now,
        updated_at=now,
    )
