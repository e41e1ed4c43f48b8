"""Domain value objects for the portal.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum

from pydantic import field_validator

from portal.domain.value.common import RootValueObject, ValueObject
from portal.domain.value.identifiers import PrincipalId

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class IdentityKind(str, Enum):
    """Discriminator of the identity union."""

    TEAM = "team"
    CLIENT = "client"


class TeamRole(str, Enum):
    """Role of an internal team member."""

    ADMIN = "admin"
    TEAM_MEMBER = "team_member"
    MODERATOR = "moderator"


class ClientRole(str, Enum):
    """Role of a contact within a client company."""

    OWNER = "owner"
    TECH = "tech"
    MEDIA = "media"
    FINANCE = "finance"
    MEMBER = "member"


class TeamStatus(str, Enum):
    """Status of a team profile."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class CompanyStatus(str, Enum):
    """Activation status of a client company."""

    PROSPECT = "prospect"
    ACTIVE = "active"
    INACTIVE = "inactive"


class InvitationRole(str, Enum):
    """Role an invitee is onboarded with.

    Team roles provision a team profile; ``client`` provisions a client contact.
    """

    ADMIN = "admin"
    TEAM_MEMBER = "team_member"
    MODERATOR = "moderator"
    CLIENT = "client"

    @property
    def is_client(self) -> bool:
        return self is InvitationRole.CLIENT

    def team_role(self) -> TeamRole:
        """Team role this invitation provisions.

        Raises:
            ValueError: If this is the client role
        """
        return TeamRole(self.value)


class InvitationStatus(str, Enum):
    """Status of an invitation.

    Only ``pending`` is non-terminal.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class InvitationAction(str, Enum):
    """Administrative actions on a pending invitation."""

    RESEND = "resend"
    CANCEL = "cancel"
    EXTEND = "extend"


class EmailAddress(RootValueObject[str]):
    """Email address, normalized to lower case without surrounding spaces."""

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate email format and normalize."""
        v = v.strip().lower()
        if len(v) > 255 or not _EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email format")
        return v


class InvitationToken(RootValueObject[str]):
    """URL-safe, unguessable invitation token."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    def redacted(self) -> str:
        """Token prefix safe for logs."""
        return self.root[:8] + "..."


class ProviderUser(ValueObject):
    """Credential as reported by the Auth Provider."""

    id: PrincipalId
    email: str | None = None


class ProviderSession(ValueObject):
    """Session issued by the Auth Provider after a code exchange."""

    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    user: ProviderUser
