"""Repository interfaces for the portal domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from portal.domain.repository.client_company import ClientCompanyRepository
from portal.domain.repository.client_contact import ClientContactRepository
from portal.domain.repository.invitation import InvitationRepository
from portal.domain.repository.team_profile import TeamProfileRepository

__all__ = [
    "ClientCompanyRepository",
    "ClientContactRepository",
    "InvitationRepository",
    "TeamProfileRepository",
]
