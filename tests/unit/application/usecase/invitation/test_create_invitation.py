"""Tests for create invitation use case."""

import pytest
from pydantic import ValidationError

from portal.application.usecase.invitation import (
    CreateInvitationRequest,
    CreateInvitationUseCase,
)
from portal.domain.error import AccessDeniedError
from portal.domain.repository import (
    ClientCompanyRepository,
    ClientContactRepository,
    TeamProfileRepository,
)
from portal.domain.service import IdentityResolver, InvitationService
from portal.domain.value import InvitationRole, InvitationStatus, TeamRole
from tests.conftest import make_company, make_contact, make_team
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def build_use_case(unit_env) -> CreateInvitationUseCase:
    return CreateInvitationUseCase(
        invitation_service=await unit_env.get(InvitationService),
        identity_resolver=await unit_env.get(IdentityResolver),
    )


class TestCreateInvitationUseCase:
    """Tests for CreateInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_moderator_creates_invitation(self, unit_env):
        # Arrange
        use_case = await build_use_case(unit_env)
        team_repo = await unit_env.get(TeamProfileRepository)
        moderator = await team_repo.insert(make_team(role=TeamRole.MODERATOR))

        # Act
        response = await use_case.execute(
            CreateInvitationRequest(
                principal_id=str(moderator.id),
                email="new.hire@example.com",
                full_name="  New Hire ",
                role=InvitationRole.TEAM_MEMBER,
            )
        )

        # Assert
        assert response.invitation.status == InvitationStatus.PENDING
        assert response.invitation.full_name == "New Hire"
        assert response.invitation.invited_by == str(moderator.id)
        assert "invitation_token" not in response.invitation.model_dump()

    @pytest.mark.asyncio
    async def test_client_caller_denied(self, unit_env):
        # Arrange
        use_case = await build_use_case(unit_env)
        company_repo = await unit_env.get(ClientCompanyRepository)
        contact_repo = await unit_env.get(ClientContactRepository)
        company = await company_repo.save(make_company())
        contact = await contact_repo.insert(make_contact(company, can_manage_team=True))

        # Act & Assert
        with pytest.raises(AccessDeniedError) as exc_info:
            await use_case.execute(
                CreateInvitationRequest(
                    principal_id=str(contact.id),
                    email="someone@example.com",
                    full_name="Someone",
                    role=InvitationRole.CLIENT,
                    company_name=company.name,
                )
            )

        assert exc_info.value.reason == "wrong_identity_kind"

    @pytest.mark.asyncio
    async def test_invalid_email_rejected(self, unit_env):
        use_case = await build_use_case(unit_env)
        team_repo = await unit_env.get(TeamProfileRepository)
        admin = await team_repo.insert(make_team())

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateInvitationRequest(
                    principal_id=str(admin.id),
                    email="not-an-email",
                    full_name="Someone",
                    role=InvitationRole.TEAM_MEMBER,
                )
            )
