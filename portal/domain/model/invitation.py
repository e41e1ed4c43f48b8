"""Invitation entity.

Invitations are time-boxed, single-use offers to create an identity.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from portal.domain.model.common import DomainModel
from portal.domain.value import (
    ClientCompanyId,
    EmailAddress,
    InvitationId,
    InvitationRole,
    InvitationStatus,
    InvitationToken,
    PrincipalId,
)


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - At most one pending invitation per email
    - Only pending invitations can be accepted, resent, extended or cancelled
    - A pending invitation observed past ``expires_at`` becomes expired
    - Client invitations always name a company
    """

    id: InvitationId
    email: EmailAddress
    full_name: str
    role: InvitationRole
    company_name: Optional[str] = None
    client_company_id: Optional[ClientCompanyId] = None
    phone: Optional[str] = None
    invited_by: PrincipalId
    invitation_token: InvitationToken
    status: InvitationStatus = InvitationStatus.PENDING
    expires_at: datetime
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    accepted_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == InvitationStatus.PENDING

    def is_expired(self, now: datetime) -> bool:
        """Whether ``now`` is strictly past the expiry instant."""
        return now > self.expires_at


class InvitationStats(DomainModel):
    """Invitation counts per status."""

    total: int = 0
    pending: int = 0
    accepted: int = 0
    expired: int = 0
    cancelled: int = 0

    @classmethod
    def from_counts(cls, counts: dict[InvitationStatus, int]) -> "InvitationStats":
        return cls(
            total=sum(counts.values()),
            **{status.value: counts.get(status, 0) for status in InvitationStatus},
        )
