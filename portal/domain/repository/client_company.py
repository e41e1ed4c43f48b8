"""Client company repository interface."""

from abc import ABC, abstractmethod

from portal.domain.model import ClientCompany
from portal.domain.value import ClientCompanyId


class ClientCompanyRepository(ABC):
    """Repository for client companies."""

    @abstractmethod
    async def find_by_id(self, company_id: ClientCompanyId) -> ClientCompany | None:
        """Find a company by id."""
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> ClientCompany | None:
        """Find a company by its exact name.

        Args:
            name: Company name

        Returns:
            The company if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, company: ClientCompany) -> ClientCompany:
        """Save a company (create or update).

        Raises:
            IntegrityError: If another company already has this name
        """
        pass
