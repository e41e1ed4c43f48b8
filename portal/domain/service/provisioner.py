"""Account provisioning domain service."""

import asyncio
from contextlib import suppress
from datetime import datetime, timezone

import logfire

from portal.domain.error import (
    CompanyNotFoundError,
    CompensationFailedError,
    DuplicateEmailError,
    ProvisioningFailedError,
)
from portal.domain.model import (
    ClientCompany,
    ClientContact,
    Identity,
    Invitation,
    TeamIdentity,
)
from portal.domain.repository import (
    ClientCompanyRepository,
    ClientContactRepository,
    TeamProfileRepository,
)
from portal.domain.value import ClientRole, PrincipalId, TeamStatus

from .auth_provider import (
    AuthProviderError,
    CredentialAdminClient,
    EmailAlreadyRegisteredError,
)
from .base import Service
from .identity_resolver import IdentityResolver


class AccountProvisioner(Service):
    """Creates a credential plus exactly one identity row for an invitation.

    The two writes live in different systems, so a failed identity insert
    is compensated by deleting the credential that was just created.
    """

    def __init__(
        self,
        credential_admin_client: CredentialAdminClient,
        team_profile_repository: TeamProfileRepository,
        client_contact_repository: ClientContactRepository,
        client_company_repository: ClientCompanyRepository,
        identity_resolver: IdentityResolver,
    ) -> None:
        self.credential_admin_client = credential_admin_client
        self.team_profile_repository = team_profile_repository
        self.client_contact_repository = client_contact_repository
        self.client_company_repository = client_company_repository
        self.identity_resolver = identity_resolver

    async def provision(self, invitation: Invitation, password: str) -> Identity:
        """Provision the account an invitation describes.

        Args:
            invitation: Pending invitation being accepted
            password: Password chosen by the invitee

        Returns:
            The freshly resolved identity

        A credential left without an identity row by an interrupted earlier
        attempt is replaced, so accepting again after a cancellation works.

        Raises:
            DuplicateEmailError: If the email already belongs to an identity
            CompanyNotFoundError: If a client invitation's company is gone
            ProvisioningFailedError: If the identity row could not be written
            CompensationFailedError: If the credential could not be rolled back
            AuthProviderError: If the provider is unreachable
        """
        with logfire.span(
            "account_provisioner.provision",
            invitation_id=str(invitation.id),
            role=invitation.role.value,
        ):
            principal_id = await self._create_credential(invitation, password)

            logfire.info(
                "Credential created",
                principal_id=str(principal_id),
                invitation_id=str(invitation.id),
            )

            try:
                await self._insert_identity(principal_id, invitation)
                return await self.identity_resolver.resolve(principal_id)
            except CompanyNotFoundError:
                await self._compensate(principal_id, invitation)
                raise
            except asyncio.CancelledError:
                logfire.warn(
                    "Provisioning cancelled, rolling back",
                    principal_id=str(principal_id),
                    invitation_id=str(invitation.id),
                )
                # A failed rollback is already logged for manual cleanup
                with suppress(CompensationFailedError):
                    await self.deprovision(principal_id, invitation)
                raise
            except Exception as e:
                logfire.error(
                    "Identity insert failed, rolling back credential",
                    principal_id=str(principal_id),
                    invitation_id=str(invitation.id),
                    error=str(e),
                )
                await self._compensate(principal_id, invitation)
                raise ProvisioningFailedError(
                    "Failed to create user profile"
                ) from e

    async def deprovision(self, principal_id: PrincipalId, invitation: Invitation) -> None:
        """Remove an identity row and credential created moments ago.

        Used when the acceptance transition is lost after provisioning.

        Raises:
            CompensationFailedError: If the credential could not be deleted
        """
        with logfire.span(
            "account_provisioner.deprovision",
            principal_id=str(principal_id),
            invitation_id=str(invitation.id),
        ):
            if invitation.role.is_client:
                await self.client_contact_repository.delete(principal_id)
            else:
                await self.team_profile_repository.delete(principal_id)
            await self._compensate(principal_id, invitation)

    async def _create_user(self, invitation: Invitation, password: str) -> PrincipalId:
        return await self.credential_admin_client.create_user(
            email=str(invitation.email),
            password=password,
            email_confirmed=True,
            metadata={
                "full_name": invitation.full_name,
                "role": invitation.role.value,
            },
        )

    async def _create_credential(
        self, invitation: Invitation, password: str
    ) -> PrincipalId:
        try:
            return await self._create_user(invitation, password)
        except EmailAlreadyRegisteredError as e:
            existing_id = await self.credential_admin_client.find_user_by_email(
                str(invitation.email)
            )
            if existing_id is None or await self.identity_resolver.email_in_use(
                invitation.email
            ):
                logfire.warn(
                    "Credential already exists for invitee",
                    invitation_id=str(invitation.id),
                )
                raise DuplicateEmailError(str(invitation.email)) from e

            # No identity row: left behind by an interrupted acceptance
            logfire.warn(
                "Replacing orphaned credential",
                principal_id=str(existing_id),
                invitation_id=str(invitation.id),
            )
            await self._compensate(existing_id, invitation)
            return await self._create_user(invitation, password)

    async def _insert_identity(
        self, principal_id: PrincipalId, invitation: Invitation
    ) -> None:
        if invitation.role.is_client:
            company = await self._find_company(invitation)
            if company is None:
                logfire.warn(
                    "Client company not found for invitation",
                    invitation_id=str(invitation.id),
                    company_name=invitation.company_name,
                )
                raise CompanyNotFoundError(invitation.company_name or "")

            await self.client_contact_repository.insert(
                ClientContact(
                    id=principal_id,
                    email=invitation.email,
                    full_name=invitation.full_name,
                    role=ClientRole.MEMBER,
                    client_company_id=company.id,
                    phone=invitation.phone,
                )
            )
        else:
            await self.team_profile_repository.insert(
                TeamIdentity(
                    id=principal_id,
                    email=invitation.email,
                    full_name=invitation.full_name,
                    role=invitation.role.team_role(),
                    status=TeamStatus.ACTIVE,
                )
            )

    async def _find_company(self, invitation: Invitation) -> ClientCompany | None:
        # Id captured at creation wins; name lookup covers companies created later
        if invitation.client_company_id:
            company = await self.client_company_repository.find_by_id(
                invitation.client_company_id
            )
            if company:
                return company
        if invitation.company_name:
            return await self.client_company_repository.find_by_name(
                invitation.company_name
            )
        return None

    async def _compensate(self, principal_id: PrincipalId, invitation: Invitation) -> None:
        try:
            await self.credential_admin_client.delete_user(principal_id)
        except AuthProviderError as e:
            logfire.error(
                "Credential rollback failed, manual cleanup required",
                principal_id=str(principal_id),
                invitation_id=str(invitation.id),
                email=str(invitation.email),
                failed_at=datetime.now(timezone.utc).isoformat(),
                error=str(e),
            )
            raise CompensationFailedError(
                f"Failed to roll back credential {principal_id}"
            ) from e
        logfire.info(
            "Credential rolled back",
            principal_id=str(principal_id),
            invitation_id=str(invitation.id),
        )
