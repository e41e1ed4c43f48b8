"""In-memory team profile repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from portal.domain.model import TeamIdentity
from portal.domain.repository.team_profile import TeamProfileRepository
from portal.domain.value import EmailAddress, PrincipalId


class InMemoryTeamProfileRepository(TeamProfileRepository):
    """In-memory implementation of TeamProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[PrincipalId, TeamIdentity] = {}

    async def find_by_id(self, principal_id: PrincipalId) -> Optional[TeamIdentity]:
        return self._profiles.get(principal_id)

    async def find_by_email(self, email: EmailAddress) -> Optional[TeamIdentity]:
        for profile in self._profiles.values():
            if profile.email == email:
                return profile
        return None

    async def insert(self, profile: TeamIdentity) -> TeamIdentity:
        """Insert a profile.

        Raises:
            IntegrityError: If the id or email is already taken
        """
        if profile.id in self._profiles or await self.find_by_email(profile.email):
            raise IntegrityError("Duplicate team profile", None, Exception())
        self._profiles[profile.id] = profile
        return profile

    async def delete(self, principal_id: PrincipalId) -> bool:
        return self._profiles.pop(principal_id, None) is not None
