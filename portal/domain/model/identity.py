"""Identity tagged union.

A principal resolves to exactly one of two shapes. Consumers branch on
``kind`` once and never probe for fields.
"""

from datetime import datetime, timezone
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from portal.domain.model.client_contact import ClientContact
from portal.domain.model.common import DomainModel
from portal.domain.model.company import ClientCompany
from portal.domain.value import (
    ClientCompanyId,
    ClientRole,
    CompanyStatus,
    EmailAddress,
    PrincipalId,
    TeamRole,
    TeamStatus,
)


class TeamIdentity(DomainModel):
    """Internal team member, stored as a team profile."""

    kind: Literal["team"] = "team"
    id: PrincipalId
    email: EmailAddress
    full_name: str
    role: TeamRole
    status: TeamStatus = TeamStatus.ACTIVE
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_admin(self) -> bool:
        return self.role == TeamRole.ADMIN

    @property
    def can_invite(self) -> bool:
        return self.role in (TeamRole.ADMIN, TeamRole.MODERATOR)


class CompanySummary(DomainModel):
    """Company fields embedded in a client identity."""

    id: ClientCompanyId
    name: str
    status: CompanyStatus


class ClientIdentity(DomainModel):
    """Contact at a client company, joined with its company."""

    kind: Literal["client"] = "client"
    id: PrincipalId
    email: EmailAddress
    full_name: str
    role: ClientRole
    client_company_id: ClientCompanyId
    company: CompanySummary
    phone: Optional[str] = None
    title: Optional[str] = None
    department: Optional[str] = None
    is_primary_contact: bool = False
    is_billing_contact: bool = False
    can_manage_team: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_contact(
        cls, contact: ClientContact, company: ClientCompany
    ) -> "ClientIdentity":
        """Assemble the identity from a contact row and its owning company."""
        return cls(
            id=contact.id,
            email=contact.email,
            full_name=contact.full_name,
            role=contact.role,
            client_company_id=contact.client_company_id,
            company=CompanySummary(
                id=company.id, name=company.name, status=company.status
            ),
            phone=contact.phone,
            title=contact.title,
            department=contact.department,
            is_primary_contact=contact.is_primary_contact,
            is_billing_contact=contact.is_billing_contact,
            can_manage_team=contact.can_manage_team,
            created_at=contact.created_at,
            updated_at=contact.updated_at,
        )


Identity = Annotated[Union[TeamIdentity, ClientIdentity], Field(discriminator="kind")]
