"""PostgreSQL implementation of ClientContact repository."""

from typing import Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.domain.model import ClientContact
from portal.domain.repository import ClientContactRepository
from portal.domain.value import EmailAddress, PrincipalId
from portal.persistence.mappers import client_contact_to_dict, row_to_client_contact
from portal.persistence.tables import client_contacts_table


class PostgresClientContactRepository(ClientContactRepository):
    """PostgreSQL implementation of ClientContactRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, principal_id: PrincipalId) -> Optional[ClientContact]:
        stmt = select(client_contacts_table).where(
            client_contacts_table.c.id == principal_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_client_contact(dict(row)) if row else None

    async def find_by_email(self, email: EmailAddress) -> Optional[ClientContact]:
        stmt = select(client_contacts_table).where(
            client_contacts_table.c.email == email.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_client_contact(dict(row)) if row else None

    async def insert(self, contact: ClientContact) -> ClientContact:
        async with self.session.begin_nested():
            await self.session.execute(
                insert(client_contacts_table).values(**client_contact_to_dict(contact))
            )
        return contact

    async def delete(self, principal_id: PrincipalId) -> bool:
        result = await self.session.execute(
            delete(client_contacts_table).where(
                client_contacts_table.c.id == principal_id
            )
        )
        return result.rowcount > 0
