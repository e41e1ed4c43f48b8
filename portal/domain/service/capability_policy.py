"""Capability policy.

Pure authorization decisions over an identity and a resource. No I/O.
"""

from dataclasses import dataclass, field
from enum import Enum

from portal.domain.model import ClientIdentity, Identity, TeamIdentity
from portal.domain.value import CompanyStatus, TeamRole


class ResourceScope(str, Enum):
    """Access classes a resource can belong to."""

    TEAM = "team"
    ADMIN = "admin"
    CLIENT = "client"
    TEAM_MANAGEMENT = "team_management"


class DenyReason(str, Enum):
    """Why a request was denied."""

    COMPANY_INACTIVE = "company_inactive"
    INSUFFICIENT_ROLE = "insufficient_role"
    WRONG_IDENTITY_KIND = "wrong_identity_kind"
    INSUFFICIENT_CAPABILITY = "insufficient_capability"


@dataclass(frozen=True)
class Resource:
    """A path together with the access classes it belongs to."""

    path: str
    scopes: frozenset[ResourceScope] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Allow:
    allowed: bool = True


@dataclass(frozen=True)
class Deny:
    reason: DenyReason
    allowed: bool = False


Decision = Allow | Deny

# Path prefixes per scope; a path matches a prefix exactly or as a parent segment
ROUTE_SCOPES: dict[ResourceScope, tuple[str, ...]] = {
    ResourceScope.TEAM: ("/dashboard", "/profile", "/admin"),
    ResourceScope.ADMIN: (
        "/dashboard/users",
        "/dashboard/clients",
        "/dashboard/settings",
        "/admin",
    ),
    ResourceScope.CLIENT: ("/client-dashboard", "/client/portal"),
    ResourceScope.TEAM_MANAGEMENT: ("/client/portal/team", "/client/portal/billing"),
}


def matches_prefix(path: str, prefix: str) -> bool:
    """Whether ``path`` is ``prefix`` or lies underneath it."""
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def classify_resource(path: str) -> Resource:
    """Derive a resource's scopes from the static route table."""
    scopes = frozenset(
        scope
        for scope, prefixes in ROUTE_SCOPES.items()
        if any(matches_prefix(path, prefix) for prefix in prefixes)
    )
    return Resource(path=path, scopes=scopes)


def authorize(identity: Identity, resource: Resource) -> Decision:
    """Decide whether an identity may access a resource.

    Rules are evaluated in order and the first match wins:

    1. Client of a company that is not active: company_inactive
    2. Admin scope for anyone but a team admin: insufficient_role
    3. Client scope for a team identity: wrong_identity_kind
    4. Team scope for a client identity: wrong_identity_kind
    5. Team-management scope for a client without can_manage_team:
       insufficient_capability
    6. Otherwise allow
    """
    scopes = resource.scopes

    if (
        isinstance(identity, ClientIdentity)
        and identity.company.status != CompanyStatus.ACTIVE
    ):
        return Deny(DenyReason.COMPANY_INACTIVE)

    if ResourceScope.ADMIN in scopes and not (
        isinstance(identity, TeamIdentity) and identity.role == TeamRole.ADMIN
    ):
        return Deny(DenyReason.INSUFFICIENT_ROLE)

    if ResourceScope.CLIENT in scopes and isinstance(identity, TeamIdentity):
        return Deny(DenyReason.WRONG_IDENTITY_KIND)

    if ResourceScope.TEAM in scopes and isinstance(identity, ClientIdentity):
        return Deny(DenyReason.WRONG_IDENTITY_KIND)

    if (
        ResourceScope.TEAM_MANAGEMENT in scopes
        and isinstance(identity, ClientIdentity)
        and not identity.can_manage_team
    ):
        return Deny(DenyReason.INSUFFICIENT_CAPABILITY)

    return Allow()
