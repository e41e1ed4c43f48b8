"""Identity resolution domain service."""

import logfire

from portal.domain.error import IdentityConflictError, IdentityNotFoundError
from portal.domain.model import ClientIdentity, Identity
from portal.domain.repository import (
    ClientCompanyRepository,
    ClientContactRepository,
    TeamProfileRepository,
)
from portal.domain.value import EmailAddress, PrincipalId

from .base import Service


class IdentityResolver(Service):
    """Maps a principal id to exactly one identity shape.

    Both stores are always consulted. A principal found in both is reported
    as a conflict and never resolved by preferring one store.
    """

    def __init__(
        self,
        team_profile_repository: TeamProfileRepository,
        client_contact_repository: ClientContactRepository,
        client_company_repository: ClientCompanyRepository,
    ) -> None:
        self.team_profile_repository = team_profile_repository
        self.client_contact_repository = client_contact_repository
        self.client_company_repository = client_company_repository

    async def resolve(self, principal_id: PrincipalId) -> Identity:
        """Resolve a principal id into a team or client identity.

        Args:
            principal_id: Principal id from a validated session

        Returns:
            The team or client identity

        Raises:
            IdentityNotFoundError: If neither store knows the principal
            IdentityConflictError: If both stores know the principal
        """
        with logfire.span(
            "identity_resolver.resolve", principal_id=str(principal_id)
        ):
            client_identity = await self._find_client(principal_id)
            team_identity = await self.team_profile_repository.find_by_id(
                principal_id
            )

            if client_identity and team_identity:
                logfire.error(
                    "Principal present in both team and client stores",
                    principal_id=str(principal_id),
                    team_email=str(team_identity.email),
                    client_email=str(client_identity.email),
                    client_company_id=str(client_identity.client_company_id),
                )
                raise IdentityConflictError(str(principal_id))

            if client_identity:
                return client_identity
            if team_identity:
                return team_identity

            logfire.warn("No identity for principal", principal_id=str(principal_id))
            raise IdentityNotFoundError(str(principal_id))

    async def email_in_use(self, email: EmailAddress) -> bool:
        """Check whether either identity store holds the email."""
        if await self.client_contact_repository.find_by_email(email):
            return True
        return await self.team_profile_repository.find_by_email(email) is not None

    async def _find_client(self, principal_id: PrincipalId) -> ClientIdentity | None:
        contact = await self.client_contact_repository.find_by_id(principal_id)
        if not contact:
            return None

        company = await self.client_company_repository.find_by_id(
            contact.client_company_id
        )
        if not company:
            # FK guarantees the company; a miss means the stores diverged
            logfire.error(
                "Client contact references missing company",
                principal_id=str(principal_id),
                client_company_id=str(contact.client_company_id),
            )
            raise IdentityNotFoundError(str(principal_id))

        return ClientIdentity.from_contact(contact, company)
