"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from portal.domain.model import ClientCompany, ClientContact, Invitation, TeamIdentity
from portal.domain.value import (
    ClientCompanyId,
    ClientRole,
    CompanyStatus,
    EmailAddress,
    InvitationId,
    InvitationRole,
    InvitationStatus,
    InvitationToken,
    PrincipalId,
    TeamRole,
    TeamStatus,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_team_profile(row: Dict[str, Any]) -> TeamIdentity:
    """Convert database row to TeamIdentity domain model.

    Args:
        row: Database row as dict

    Returns:
        TeamIdentity domain model
    """
    return TeamIdentity(
        id=PrincipalId(_uuid(row["id"])),
        email=EmailAddress(row["email"]),
        full_name=row["full_name"],
        role=TeamRole(row["role"]),
        status=TeamStatus(row["status"]),
        avatar_url=row.get("avatar_url"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def team_profile_to_dict(profile: TeamIdentity) -> Dict[str, Any]:
    """Convert TeamIdentity to database dict (the ``kind`` tag is not stored)."""
    return {
        "id": profile.id,
        "email": profile.email.root,
        "full_name": profile.full_name,
        "role": profile.role.value,
        "status": profile.status.value,
        "avatar_url": profile.avatar_url,
        "created_at": profile.created_at,
        "updated_at": profile.updated_at,
    }


def row_to_client_contact(row: Dict[str, Any]) -> ClientContact:
    """Convert database row to ClientContact domain model."""
    return ClientContact(
        id=PrincipalId(_uuid(row["id"])),
        email=EmailAddress(row["email"]),
        full_name=row["full_name"],
        role=ClientRole(row["role"]),
        client_company_id=ClientCompanyId(_uuid(row["client_company_id"])),
        phone=row.get("phone"),
        title=row.get("title"),
        department=row.get("department"),
        is_primary_contact=row["is_primary_contact"],
        is_billing_contact=row["is_billing_contact"],
        can_manage_team=row["can_manage_team"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def client_contact_to_dict(contact: ClientContact) -> Dict[str, Any]:
    """Convert ClientContact to database dict."""
    return {
        "id": contact.id,
        "email": contact.email.root,
        "full_name": contact.full_name,
        "role": contact.role.value,
        "client_company_id": contact.client_company_id,
        "phone": contact.phone,
        "title": contact.title,
        "department": contact.department,
        "is_primary_contact": contact.is_primary_contact,
        "is_billing_contact": contact.is_billing_contact,
        "can_manage_team": contact.can_manage_team,
        "created_at": contact.created_at,
        "updated_at": contact.updated_at,
    }


def row_to_client_company(row: Dict[str, Any]) -> ClientCompany:
    """Convert database row to ClientCompany domain model."""
    return ClientCompany(
        id=ClientCompanyId(_uuid(row["id"])),
        name=row["name"],
        status=CompanyStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def client_company_to_dict(company: ClientCompany) -> Dict[str, Any]:
    """Convert ClientCompany to database dict."""
    return {
        "id": company.id,
        "name": company.name,
        "status": company.status.value,
        "created_at": company.created_at,
        "updated_at": company.updated_at,
    }


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        email=EmailAddress(row["email"]),
        full_name=row["full_name"],
        role=InvitationRole(row["role"]),
        company_name=row.get("company_name"),
        client_company_id=(
            ClientCompanyId(_uuid(row["client_company_id"]))
            if row.get("client_company_id")
            else None
        ),
        phone=row.get("phone"),
        invited_by=PrincipalId(_uuid(row["invited_by"])),
        invitation_token=InvitationToken(row["invitation_token"]),
        status=InvitationStatus(row["status"]),
        expires_at=row["expires_at"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        accepted_at=row.get("accepted_at"),
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict.

    Args:
        invitation: Invitation domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": invitation.id,
        "email": invitation.email.root,
        "full_name": invitation.full_name,
        "role": invitation.role.value,
        "company_name": invitation.company_name,
        "client_company_id": invitation.client_company_id,
        "phone": invitation.phone,
        "invited_by": invitation.invited_by,
        "invitation_token": invitation.invitation_token.root,
        "status": invitation.status.value,
        "expires_at": invitation.expires_at,
        "created_at": invitation.created_at,
        "updated_at": invitation.updated_at,
        "accepted_at": invitation.accepted_at,
    }
