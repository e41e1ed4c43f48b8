"""Tests for manage invitation use case."""

from datetime import timedelta

import pytest

from portal.application.usecase.invitation import (
    ManageInvitationRequest,
    ManageInvitationUseCase,
)
from portal.domain.error import AccessDeniedError, InvitationNotPendingError
from portal.domain.repository import InvitationRepository, TeamProfileRepository
from portal.domain.service import IdentityResolver, InvitationService
from portal.domain.value import InvitationAction, InvitationStatus, TeamRole
from tests.conftest import make_invitation, make_team
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestManageInvitationUseCase:
    """Tests for ManageInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_extend_returns_message_and_invitation(self, unit_env):
        # Arrange
        use_case = ManageInvitationUseCase(
            await unit_env.get(InvitationService),
            await unit_env.get(IdentityResolver),
        )
        team_repo = await unit_env.get(TeamProfileRepository)
        repo = await unit_env.get(InvitationRepository)
        admin = await team_repo.insert(make_team())
        invitation = await repo.insert(make_invitation(expires_in=timedelta(hours=1)))

        # Act
        response = await use_case.execute(
            ManageInvitationRequest(
                principal_id=str(admin.id),
                invitation_id=invitation.id,
                action=InvitationAction.EXTEND,
            )
        )

        # Assert
        assert response.message == "Invitation extended successfully"
        assert response.invitation.expires_at > invitation.expires_at

    @pytest.mark.asyncio
    async def test_cancel_twice_is_not_pending(self, unit_env):
        use_case = ManageInvitationUseCase(
            await unit_env.get(InvitationService),
            await unit_env.get(IdentityResolver),
        )
        team_repo = await unit_env.get(TeamProfileRepository)
        repo = await unit_env.get(InvitationRepository)
        admin = await team_repo.insert(make_team())
        invitation = await repo.insert(make_invitation())
        request = ManageInvitationRequest(
            principal_id=str(admin.id),
            invitation_id=invitation.id,
            action=InvitationAction.CANCEL,
        )

        response = await use_case.execute(request)
        assert response.invitation.status == InvitationStatus.CANCELLED

        with pytest.raises(InvitationNotPendingError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_team_member_cannot_manage(self, unit_env):
        use_case = ManageInvitationUseCase(
            await unit_env.get(InvitationService),
            await unit_env.get(IdentityResolver),
        )
        team_repo = await unit_env.get(TeamProfileRepository)
        repo = await unit_env.get(InvitationRepository)
        member = await team_repo.insert(make_team(role=TeamRole.TEAM_MEMBER))
        invitation = await repo.insert(make_invitation())

        with pytest.raises(AccessDeniedError):
            await use_case.execute(
                ManageInvitationRequest(
                    principal_id=str(member.id),
                    invitation_id=invitation.id,
                    action=InvitationAction.RESEND,
                )
            )
