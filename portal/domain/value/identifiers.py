"""Strongly typed identifiers for portal domain entities."""

from typing import NewType
from uuid import UUID

# Issued by the Auth Provider; shared by credential and identity row
PrincipalId = NewType("PrincipalId", UUID)
InvitationId = NewType("InvitationId", UUID)
ClientCompanyId = NewType("ClientCompanyId", UUID)
