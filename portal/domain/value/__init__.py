"""Domain value objects for the portal."""

from portal.domain.value.identifiers import (
    ClientCompanyId,
    InvitationId,
    PrincipalId,
)
from portal.domain.value.types import (
    ClientRole,
    CompanyStatus,
    EmailAddress,
    IdentityKind,
    InvitationAction,
    InvitationRole,
    InvitationStatus,
    InvitationToken,
    ProviderSession,
    ProviderUser,
    TeamRole,
    TeamStatus,
)

__all__ = [
    # Identifiers
    "PrincipalId",
    "InvitationId",
    "ClientCompanyId",
    # Types
    "ClientRole",
    "CompanyStatus",
    "EmailAddress",
    "IdentityKind",
    "InvitationAction",
    "InvitationRole",
    "InvitationStatus",
    "InvitationToken",
    "ProviderSession",
    "ProviderUser",
    "TeamRole",
    "TeamStatus",
]
