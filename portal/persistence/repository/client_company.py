"""PostgreSQL implementation of ClientCompany repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portal.domain.model import ClientCompany
from portal.domain.repository import ClientCompanyRepository
from portal.domain.value import ClientCompanyId
from portal.persistence.mappers import client_company_to_dict, row_to_client_company
from portal.persistence.tables import client_companies_table


class PostgresClientCompanyRepository(ClientCompanyRepository):
    """PostgreSQL implementation of ClientCompanyRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, company_id: ClientCompanyId) -> Optional[ClientCompany]:
        stmt = select(client_companies_table).where(
            client_companies_table.c.id == company_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_client_company(dict(row)) if row else None

    async def find_by_name(self, name: str) -> Optional[ClientCompany]:
        stmt = select(client_companies_table).where(
            client_companies_table.c.name == name
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_client_company(dict(row)) if row else None

    async def save(self, company: ClientCompany) -> ClientCompany:
        company_dict = client_company_to_dict(company)

        existing = await self.find_by_id(company.id)
        if existing:
            stmt = (
                update(client_companies_table)
                .where(client_companies_table.c.id == company.id)
                .values(**company_dict)
            )
        else:
            stmt = insert(client_companies_table).values(**company_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return company
