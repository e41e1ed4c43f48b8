"""Client company entity."""

from datetime import datetime, timezone

from pydantic import Field

from portal.domain.model.common import DomainModel
from portal.domain.value import ClientCompanyId, CompanyStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ClientCompany(DomainModel):
    """A tenant whose contacts log into the client portal.

    Contacts of a company that is not ``active`` are denied every
    protected resource.
    """

    id: ClientCompanyId
    name: str = Field(min_length=1, max_length=255)
    status: CompanyStatus = CompanyStatus.PROSPECT
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == CompanyStatus.ACTIVE
