"""Tests for preview and accept invitation use cases."""

import pytest

from portal.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationUseCase,
    PreviewInvitationRequest,
    PreviewInvitationUseCase,
)
from portal.domain.error import InvalidTokenError
from portal.domain.repository import ClientCompanyRepository, InvitationRepository
from portal.domain.service import InvitationService
from portal.domain.value import InvitationRole
from tests.conftest import make_company, make_invitation
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestPreviewInvitationUseCase:
    """Tests for PreviewInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_preview_pending_invitation(self, unit_env):
        # Arrange
        use_case = PreviewInvitationUseCase(await unit_env.get(InvitationService))
        repo = await unit_env.get(InvitationRepository)
        invitation = await repo.insert(
            make_invitation(role=InvitationRole.CLIENT, company_name="Acme Corp")
        )

        # Act
        response = await use_case.execute(
            PreviewInvitationRequest(token=invitation.invitation_token.root)
        )

        # Assert
        assert response.email == "invitee@example.com"
        assert response.full_name == invitation.full_name
        assert response.role == InvitationRole.CLIENT
        assert response.company_name == "Acme Corp"
        assert response.expires_at == invitation.expires_at

    @pytest.mark.asyncio
    async def test_preview_unknown_token(self, unit_env):
        use_case = PreviewInvitationUseCase(await unit_env.get(InvitationService))

        with pytest.raises(InvalidTokenError):
            await use_case.execute(PreviewInvitationRequest(token="no-such-token"))


class TestAcceptInvitationUseCase:
    """Tests for AcceptInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_accept_returns_identity_summary(self, unit_env):
        # Arrange
        use_case = AcceptInvitationUseCase(await unit_env.get(InvitationService))
        repo = await unit_env.get(InvitationRepository)
        company_repo = await unit_env.get(ClientCompanyRepository)
        await company_repo.save(make_company(name="Acme Corp"))
        invitation = await repo.insert(
            make_invitation(role=InvitationRole.CLIENT, company_name="Acme Corp")
        )

        # Act
        response = await use_case.execute(
            AcceptInvitationRequest(
                token=invitation.invitation_token.root,
                password="correct-horse",
                confirm_password="correct-horse",
            )
        )

        # Assert
        assert response.message == "Account created successfully"
        assert response.user.kind == "client"
        assert response.user.email == "invitee@example.com"
        assert response.user.role == "member"
        assert response.user.company_name == "Acme Corp"
