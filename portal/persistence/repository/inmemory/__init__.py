"""In-memory repository implementations for testing."""

from .client_company import InMemoryClientCompanyRepository
from .client_contact import InMemoryClientContactRepository
from .invitation import InMemoryInvitationRepository
from .team_profile import InMemoryTeamProfileRepository

__all__ = [
    "InMemoryClientCompanyRepository",
    "InMemoryClientContactRepository",
    "InMemoryInvitationRepository",
    "InMemoryTeamProfileRepository",
]
