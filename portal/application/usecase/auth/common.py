"""Shared identity response models."""

from pydantic import BaseModel

from portal.domain.model import ClientIdentity, Identity


class IdentitySummary(BaseModel):
    """Minimal identity shape returned after account creation."""

    kind: str
    id: str
    email: str
    full_name: str
    role: str
    company_name: str | None = None

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentitySummary":
        return cls(
            kind=identity.kind,
            id=str(identity.id),
            email=str(identity.email),
            full_name=identity.full_name,
            role=identity.role.value,
            company_name=(
                identity.company.name if isinstance(identity, ClientIdentity) else None
            ),
        )
