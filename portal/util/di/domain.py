"""Domain layer DI providers."""

from dishka import Scope, provide

from portal.config import Settings
from portal.domain.repository import (
    ClientCompanyRepository,
    ClientContactRepository,
    InvitationRepository,
    TeamProfileRepository,
)
from portal.domain.service import (
    AccountProvisioner,
    CredentialAdminClient,
    IdentityResolver,
    InvitationNotifier,
    InvitationService,
)
from portal.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_identity_resolver(
        self,
        team_profile_repository: TeamProfileRepository,
        client_contact_repository: ClientContactRepository,
        client_company_repository: ClientCompanyRepository,
    ) -> IdentityResolver:
        """Provide identity resolver."""
        return IdentityResolver(
            team_profile_repository=team_profile_repository,
            client_contact_repository=client_contact_repository,
            client_company_repository=client_company_repository,
        )

    @provide
    def get_account_provisioner(
        self,
        credential_admin_client: CredentialAdminClient,
        team_profile_repository: TeamProfileRepository,
        client_contact_repository: ClientContactRepository,
        client_company_repository: ClientCompanyRepository,
        identity_resolver: IdentityResolver,
    ) -> AccountProvisioner:
        """Provide account provisioner (the only user of the admin tier)."""
        return AccountProvisioner(
            credential_admin_client=credential_admin_client,
            team_profile_repository=team_profile_repository,
            client_contact_repository=client_contact_repository,
            client_company_repository=client_company_repository,
            identity_resolver=identity_resolver,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        client_company_repository: ClientCompanyRepository,
        identity_resolver: IdentityResolver,
        account_provisioner: AccountProvisioner,
        notifier: InvitationNotifier,
        settings: Settings,
    ) -> InvitationService:
        """Provide invitation lifecycle service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            client_company_repository=client_company_repository,
            identity_resolver=identity_resolver,
            account_provisioner=account_provisioner,
            notifier=notifier,
            settings=settings,
        )
