"""End-to-end tests for invitation endpoints."""

from datetime import timedelta
from uuid import uuid4

import pytest

from portal.adapter.auth_provider import MockSessionClient
from portal.domain.repository import (
    ClientCompanyRepository,
    InvitationRepository,
    TeamProfileRepository,
)
from portal.domain.service import CredentialAdminClient, InvitationNotifier
from portal.domain.value import InvitationRole, TeamRole
from tests.conftest import make_company, make_invitation, make_team


def auth_headers(identity) -> dict[str, str]:
    return {"Authorization": f"Bearer {MockSessionClient.token_for(identity.id)}"}


async def seed_team(container, role: TeamRole = TeamRole.ADMIN):
    team_repo = await container.get(TeamProfileRepository)
    return await team_repo.insert(make_team(role=role))


def sent_token(notifier) -> str:
    return notifier.sent[-1].accept_url.rsplit("/", 1)[-1]


class TestCreateInvitation:
    """POST /invitations"""

    @pytest.mark.asyncio
    async def test_admin_invites_team_member(self, client, container):
        # Arrange
        admin = await seed_team(container)
        notifier = await container.get(InvitationNotifier)

        # Act
        response = await client.post(
            "/invitations",
            json={
                "email": "  New.Hire@Example.com ",
                "full_name": "New Hire",
                "role": "team_member",
            },
            headers=auth_headers(admin),
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["invitation"]["email"] == "new.hire@example.com"
        assert body["invitation"]["status"] == "pending"
        assert "invitation_token" not in body["invitation"]
        assert len(notifier.sent) == 1
        assert notifier.sent[0].to == "new.hire@example.com"

    @pytest.mark.asyncio
    async def test_requires_session(self, client):
        response = await client.post(
            "/invitations",
            json={"email": "a@example.com", "full_name": "A", "role": "team_member"},
        )

        assert response.status_code == 401
        assert response.json()["kind"] == "unauthenticated"

    @pytest.mark.asyncio
    async def test_team_member_is_forbidden(self, client, container):
        member = await seed_team(container, TeamRole.TEAM_MEMBER)

        response = await client.post(
            "/invitations",
            json={"email": "a@example.com", "full_name": "A", "role": "team_member"},
            headers=auth_headers(member),
        )

        assert response.status_code == 403
        assert response.json()["kind"] == "insufficient_role"

    @pytest.mark.asyncio
    async def test_client_invitation_requires_company(self, client, container):
        admin = await seed_team(container)

        response = await client.post(
            "/invitations",
            json={"email": "c@example.com", "full_name": "C", "role": "client"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"

    @pytest.mark.asyncio
    async def test_invalid_email(self, client, container):
        admin = await seed_team(container)

        response = await client.post(
            "/invitations",
            json={"email": "nope", "full_name": "N", "role": "team_member"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_duplicate_pending_invitation(self, client, container):
        admin = await seed_team(container)
        payload = {"email": "dup@example.com", "full_name": "D", "role": "team_member"}

        first = await client.post(
            "/invitations", json=payload, headers=auth_headers(admin)
        )
        second = await client.post(
            "/invitations", json=payload, headers=auth_headers(admin)
        )

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["kind"] == "duplicate_pending_invitation"

    @pytest.mark.asyncio
    async def test_delivery_failure_removes_invitation(self, client, container):
        # Arrange
        admin = await seed_team(container)
        notifier = await container.get(InvitationNotifier)
        notifier.fail = True

        # Act
        response = await client.post(
            "/invitations",
            json={"email": "lost@example.com", "full_name": "L", "role": "team_member"},
            headers=auth_headers(admin),
        )

        # Assert
        assert response.status_code == 502
        assert response.json()["kind"] == "delivery_failed"
        repo = await container.get(InvitationRepository)
        assert await repo.find_all(status=None) == []


class TestAcceptInvitation:
    """GET and POST /invitations/accept"""

    @pytest.mark.asyncio
    async def test_invite_preview_and_accept_client(self, client, container):
        # Arrange
        admin = await seed_team(container)
        company_repo = await container.get(ClientCompanyRepository)
        await company_repo.save(make_company(name="Acme Corp"))
        notifier = await container.get(InvitationNotifier)

        created = await client.post(
            "/invitations",
            json={
                "email": "carla@acme.com",
                "full_name": "Carla",
                "role": "client",
                "company_name": "Acme Corp",
            },
            headers=auth_headers(admin),
        )
        assert created.status_code == 201
        token = sent_token(notifier)

        # Act
        preview = await client.get("/invitations/accept", params={"token": token})
        accepted = await client.post(
            "/invitations/accept",
            json={
                "token": token,
                "password": "correct-horse",
                "confirm_password": "correct-horse",
            },
        )

        # Assert
        assert preview.status_code == 200
        assert preview.json()["company_name"] == "Acme Corp"
        assert accepted.status_code == 200
        user = accepted.json()["user"]
        assert user["kind"] == "client"
        assert user["email"] == "carla@acme.com"
        assert user["company_name"] == "Acme Corp"

        admin_client = await container.get(CredentialAdminClient)
        assert [u["email"] for u in admin_client.users.values()] == ["carla@acme.com"]

    @pytest.mark.asyncio
    async def test_accept_twice(self, client, container):
        repo = await container.get(InvitationRepository)
        invitation = await repo.insert(make_invitation(email="twice@example.com"))
        body = {"token": invitation.invitation_token.root, "password": "long-enough"}

        first = await client.post("/invitations/accept", json=body)
        second = await client.post("/invitations/accept", json=body)
        preview = await client.get(
            "/invitations/accept", params={"token": invitation.invitation_token.root}
        )

        assert first.status_code == 200
        assert second.status_code == 409
        assert second.json()["kind"] == "not_pending"
        assert preview.status_code == 410

    @pytest.mark.asyncio
    async def test_unknown_token(self, client):
        response = await client.get("/invitations/accept", params={"token": "bogus"})

        assert response.status_code == 404
        assert response.json()["kind"] == "invalid_token"

    @pytest.mark.asyncio
    async def test_expired_invitation(self, client, container):
        repo = await container.get(InvitationRepository)
        invitation = await repo.insert(make_invitation(expires_in=timedelta(hours=-1)))

        response = await client.post(
            "/invitations/accept",
            json={"token": invitation.invitation_token.root, "password": "long-enough"},
        )

        assert response.status_code == 410
        assert response.json()["kind"] == "expired"

    @pytest.mark.asyncio
    async def test_short_password(self, client, container):
        repo = await container.get(InvitationRepository)
        invitation = await repo.insert(make_invitation())

        response = await client.post(
            "/invitations/accept",
            json={"token": invitation.invitation_token.root, "password": "short"},
        )

        assert response.status_code == 400
        assert response.json()["kind"] == "weak_password"

    @pytest.mark.asyncio
    async def test_accept_is_public(self, client, container):
        """Acceptance pages work without a session and are not redirected."""
        repo = await container.get(InvitationRepository)
        invitation = await repo.insert(make_invitation())

        response = await client.get(
            "/invitations/accept", params={"token": invitation.invitation_token.root}
        )

        assert response.status_code == 200
        assert response.json()["role"] == InvitationRole.TEAM_MEMBER.value


class TestManageInvitations:
    """GET /invitations, GET and PATCH /invitations/{id}"""

    @pytest.mark.asyncio
    async def test_list_with_stats(self, client, container):
        # Arrange
        admin = await seed_team(container)
        repo = await container.get(InvitationRepository)
        await repo.insert(make_invitation(email="p1@example.com"))
        await repo.insert(make_invitation(email="p2@example.com"))
        await repo.insert(
            make_invitation(email="gone@example.com", expires_in=timedelta(days=-1))
        )

        # Act
        response = await client.get(
            "/invitations", params={"status": "all"}, headers=auth_headers(admin)
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert len(body["invitations"]) == 3
        assert body["stats"]["total"] == 3
        assert body["stats"]["pending"] == 2
        assert body["stats"]["expired"] == 1

    @pytest.mark.asyncio
    async def test_list_is_admin_only(self, client, container):
        moderator = await seed_team(container, TeamRole.MODERATOR)

        response = await client.get("/invitations", headers=auth_headers(moderator))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_list_rejects_unknown_status(self, client, container):
        admin = await seed_team(container)

        response = await client.get(
            "/invitations", params={"status": "bogus"}, headers=auth_headers(admin)
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_get_unknown_invitation(self, client, container):
        admin = await seed_team(container)

        response = await client.get(
            f"/invitations/{uuid4()}", headers=auth_headers(admin)
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_cancel_then_manage_again(self, client, container):
        # Arrange
        admin = await seed_team(container)
        repo = await container.get(InvitationRepository)
        invitation = await repo.insert(make_invitation())

        # Act
        cancelled = await client.patch(
            f"/invitations/{invitation.id}",
            json={"action": "cancel"},
            headers=auth_headers(admin),
        )
        again = await client.patch(
            f"/invitations/{invitation.id}",
            json={"action": "extend"},
            headers=auth_headers(admin),
        )

        # Assert
        assert cancelled.status_code == 200
        assert cancelled.json()["invitation"]["status"] == "cancelled"
        assert again.status_code == 400
        assert again.json()["kind"] == "not_pending"

    @pytest.mark.asyncio
    async def test_resend_sends_email(self, client, container):
        admin = await seed_team(container)
        repo = await container.get(InvitationRepository)
        notifier = await container.get(InvitationNotifier)
        invitation = await repo.insert(make_invitation())

        response = await client.patch(
            f"/invitations/{invitation.id}",
            json={"action": "resend"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        assert len(notifier.sent) == 1
        assert notifier.sent[0].to == "invitee@example.com"

    @pytest.mark.asyncio
    async def test_unknown_action(self, client, container):
        admin = await seed_team(container)
        repo = await container.get(InvitationRepository)
        invitation = await repo.insert(make_invitation())

        response = await client.patch(
            f"/invitations/{invitation.id}",
            json={"action": "delete"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"


class TestInvitationScenarios:
    """Cross-endpoint flows."""

    @pytest.mark.asyncio
    async def test_stale_preview_is_gone_and_marked_expired(self, client, container):
        # Arrange
        admin = await seed_team(container)
        repo = await container.get(InvitationRepository)
        invitation = await repo.insert(make_invitation(expires_in=timedelta(seconds=-1)))

        # Act
        preview = await client.get(
            "/invitations/accept", params={"token": invitation.invitation_token.root}
        )
        read = await client.get(
            f"/invitations/{invitation.id}", headers=auth_headers(admin)
        )

        # Assert
        assert preview.status_code == 410
        assert read.json()["status"] == "expired"

    @pytest.mark.asyncio
    async def test_cancel_accepted_invitation(self, client, container):
        admin = await seed_team(container)
        repo = await container.get(InvitationRepository)
        invitation = await repo.insert(make_invitation(email="done@example.com"))
        await client.post(
            "/invitations/accept",
            json={"token": invitation.invitation_token.root, "password": "long-enough"},
        )

        response = await client.patch(
            f"/invitations/{invitation.id}",
            json={"action": "cancel"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400
        assert (await repo.find_by_id(invitation.id)).status.value == "accepted"

    @pytest.mark.asyncio
    async def test_accept_when_identity_already_exists(self, client, container):
        # Arrange
        repo = await container.get(InvitationRepository)
        team_repo = await container.get(TeamProfileRepository)
        invitation = await repo.insert(make_invitation(email="taken@example.com"))
        await team_repo.insert(make_team(email="taken@example.com"))

        # Act
        response = await client.post(
            "/invitations/accept",
            json={"token": invitation.invitation_token.root, "password": "long-enough"},
        )

        # Assert
        assert response.status_code == 409
        assert response.json()["kind"] == "duplicate_email"
        admin_client = await container.get(CredentialAdminClient)
        assert admin_client.users == {}
