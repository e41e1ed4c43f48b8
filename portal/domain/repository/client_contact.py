"""Client contact repository interface."""

from abc import ABC, abstractmethod

from portal.domain.model import ClientContact
from portal.domain.value import EmailAddress, PrincipalId


class ClientContactRepository(ABC):
    """Repository for client contacts (the client identity store)."""

    @abstractmethod
    async def find_by_id(self, principal_id: PrincipalId) -> ClientContact | None:
        """Find a client contact by principal id.

        Args:
            principal_id: Principal id issued by the Auth Provider

        Returns:
            The contact if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: EmailAddress) -> ClientContact | None:
        """Find a client contact by normalized email."""
        pass

    @abstractmethod
    async def insert(self, contact: ClientContact) -> ClientContact:
        """Insert a new client contact.

        Args:
            contact: The contact to insert

        Returns:
            The inserted contact

        Raises:
            IntegrityError: If the id or email is already taken
        """
        pass

    @abstractmethod
    async def delete(self, principal_id: PrincipalId) -> bool:
        """Delete a client contact. Returns True if a row was removed."""
        pass
