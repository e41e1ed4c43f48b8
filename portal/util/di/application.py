"""Application layer DI providers."""

from dishka import Scope, provide

from portal.application.usecase.auth import GetUserProfileUseCase
from portal.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CreateInvitationUseCase,
    GetInvitationUseCase,
    ListInvitationsUseCase,
    ManageInvitationUseCase,
    PreviewInvitationUseCase,
)
from portal.domain.service import IdentityResolver, InvitationService
from portal.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Invitation use cases
    @provide
    def get_create_invitation_use_case(
        self,
        invitation_service: InvitationService,
        identity_resolver: IdentityResolver,
    ) -> CreateInvitationUseCase:
        return CreateInvitationUseCase(
            invitation_service=invitation_service,
            identity_resolver=identity_resolver,
        )

    @provide
    def get_list_invitations_use_case(
        self,
        invitation_service: InvitationService,
        identity_resolver: IdentityResolver,
    ) -> ListInvitationsUseCase:
        return ListInvitationsUseCase(
            invitation_service=invitation_service,
            identity_resolver=identity_resolver,
        )

    @provide
    def get_get_invitation_use_case(
        self,
        invitation_service: InvitationService,
        identity_resolver: IdentityResolver,
    ) -> GetInvitationUseCase:
        return GetInvitationUseCase(
            invitation_service=invitation_service,
            identity_resolver=identity_resolver,
        )

    @provide
    def get_manage_invitation_use_case(
        self,
        invitation_service: InvitationService,
        identity_resolver: IdentityResolver,
    ) -> ManageInvitationUseCase:
        return ManageInvitationUseCase(
            invitation_service=invitation_service,
            identity_resolver=identity_resolver,
        )

    @provide
    def get_preview_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> PreviewInvitationUseCase:
        return PreviewInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_accept_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> AcceptInvitationUseCase:
        return AcceptInvitationUseCase(invitation_service=invitation_service)

    # Auth use cases
    @provide
    def get_user_profile_use_case(
        self, identity_resolver: IdentityResolver
    ) -> GetUserProfileUseCase:
        return GetUserProfileUseCase(identity_resolver=identity_resolver)
