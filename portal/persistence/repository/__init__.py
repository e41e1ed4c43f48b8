"""PostgreSQL repository implementations."""

from portal.persistence.repository.client_company import (
    PostgresClientCompanyRepository,
)
from portal.persistence.repository.client_contact import (
    PostgresClientContactRepository,
)
from portal.persistence.repository.invitation import PostgresInvitationRepository
from portal.persistence.repository.team_profile import PostgresTeamProfileRepository

__all__ = [
    "PostgresClientCompanyRepository",
    "PostgresClientContactRepository",
    "PostgresInvitationRepository",
    "PostgresTeamProfileRepository",
]
