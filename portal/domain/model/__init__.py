"""Domain model entities for the portal."""

from portal.domain.model.client_contact import ClientContact
from portal.domain.model.company import ClientCompany
from portal.domain.model.identity import (
    ClientIdentity,
    CompanySummary,
    Identity,
    TeamIdentity,
)
from portal.domain.model.invitation import Invitation, InvitationStats

__all__ = [
    "ClientCompany",
    "ClientContact",
    "ClientIdentity",
    "CompanySummary",
    "Identity",
    "Invitation",
    "InvitationStats",
    "TeamIdentity",
]
