"""In-memory client company repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from portal.domain.model import ClientCompany
from portal.domain.repository.client_company import ClientCompanyRepository
from portal.domain.value import ClientCompanyId


class InMemoryClientCompanyRepository(ClientCompanyRepository):
    """In-memory implementation of ClientCompanyRepository for testing."""

    def __init__(self) -> None:
        self._companies: dict[ClientCompanyId, ClientCompany] = {}

    async def find_by_id(self, company_id: ClientCompanyId) -> Optional[ClientCompany]:
        return self._companies.get(company_id)

    async def find_by_name(self, name: str) -> Optional[ClientCompany]:
        for company in self._companies.values():
            if company.name == name:
                return company
        return None

    async def save(self, company: ClientCompany) -> ClientCompany:
        """Save a company (create or update).

        Raises:
            IntegrityError: If another company already has the name
        """
        same_name = await self.find_by_name(company.name)
        if same_name and same_name.id != company.id:
            raise IntegrityError("Duplicate company name", None, Exception())
        self._companies[company.id] = company
        return company
