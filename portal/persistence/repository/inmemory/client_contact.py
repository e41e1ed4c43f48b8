"""In-memory client contact repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from portal.domain.model import ClientContact
from portal.domain.repository.client_contact import ClientContactRepository
from portal.domain.value import EmailAddress, PrincipalId


class InMemoryClientContactRepository(ClientContactRepository):
    """In-memory implementation of ClientContactRepository for testing.

    ``fail_inserts`` makes every insert raise, simulating a store failure.
    """

    def __init__(self) -> None:
        self._contacts: dict[PrincipalId, ClientContact] = {}
        self.fail_inserts = False

    async def find_by_id(self, principal_id: PrincipalId) -> Optional[ClientContact]:
        return self._contacts.get(principal_id)

    async def find_by_email(self, email: EmailAddress) -> Optional[ClientContact]:
        for contact in self._contacts.values():
            if contact.email == email:
                return contact
        return None

    async def insert(self, contact: ClientContact) -> ClientContact:
        if self.fail_inserts:
            raise IntegrityError("Client contact insert failed", None, Exception())
        if contact.id in self._contacts or await self.find_by_email(contact.email):
            raise IntegrityError("Duplicate client contact", None, Exception())
        self._contacts[contact.id] = contact
        return contact

    async def delete(self, principal_id: PrincipalId) -> bool:
        return self._contacts.pop(principal_id, None) is not None
