"""Client contact entity (row of the client contact store)."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from portal.domain.model.common import DomainModel
from portal.domain.value import ClientCompanyId, ClientRole, EmailAddress, PrincipalId


class ClientContact(DomainModel):
    """Person at a client company with portal access.

    The id is the principal id issued by the Auth Provider.
    """

    id: PrincipalId
    email: EmailAddress
    full_name: str
    role: ClientRole = ClientRole.MEMBER
    client_company_id: ClientCompanyId
    phone: Optional[str] = None
    title: Optional[str] = None
    department: Optional[str] = None
    is_primary_contact: bool = False
    is_billing_contact: bool = False
    can_manage_team: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
