"""Team profile repository interface."""

from abc import ABC, abstractmethod

from portal.domain.model import TeamIdentity
from portal.domain.value import EmailAddress, PrincipalId


class TeamProfileRepository(ABC):
    """Repository for team profiles (the team identity store)."""

    @abstractmethod
    async def find_by_id(self, principal_id: PrincipalId) -> TeamIdentity | None:
        """Find a team profile by principal id.

        Args:
            principal_id: Principal id issued by the Auth Provider

        Returns:
            The team identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: EmailAddress) -> TeamIdentity | None:
        """Find a team profile by normalized email.

        Args:
            email: Email address

        Returns:
            The team identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, profile: TeamIdentity) -> TeamIdentity:
        """Insert a new team profile.

        Args:
            profile: The profile to insert

        Returns:
            The inserted profile

        Raises:
            IntegrityError: If the id or email is already taken
        """
        pass

    @abstractmethod
    async def delete(self, principal_id: PrincipalId) -> bool:
        """Delete a team profile.

        Args:
            principal_id: Principal id of the profile

        Returns:
            True if a profile was deleted
        """
        pass
