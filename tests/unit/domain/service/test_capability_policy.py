"""Unit tests for the capability policy."""

import pytest

from portal.domain.model import ClientIdentity
from portal.domain.service import (
    Allow,
    Deny,
    DenyReason,
    Resource,
    ResourceScope,
    authorize,
    classify_resource,
)
from portal.domain.value import CompanyStatus, TeamRole
from tests.conftest import make_company, make_contact, make_team


def client_identity(
    status: CompanyStatus = CompanyStatus.ACTIVE, can_manage_team: bool = False
) -> ClientIdentity:
    company = make_company(status=status)
    return ClientIdentity.from_contact(
        make_contact(company, can_manage_team=can_manage_team), company
    )


class TestClassifyResource:
    """Tests for the static route table."""

    def test_dashboard_is_team_scoped(self):
        assert classify_resource("/dashboard").scopes == {ResourceScope.TEAM}

    def test_dashboard_users_is_admin_scoped(self):
        scopes = classify_resource("/dashboard/users/42").scopes
        assert ResourceScope.ADMIN in scopes
        assert ResourceScope.TEAM in scopes

    def test_client_portal_team_page_needs_team_management(self):
        scopes = classify_resource("/client/portal/team").scopes
        assert scopes == {ResourceScope.CLIENT, ResourceScope.TEAM_MANAGEMENT}

    def test_prefix_must_match_whole_segment(self):
        assert classify_resource("/dashboards").scopes == frozenset()

    def test_public_path_has_no_scopes(self):
        assert classify_resource("/about").scopes == frozenset()


class TestAuthorize:
    """Tests for authorize rules, evaluated in order."""

    def test_inactive_company_denied_everywhere(self):
        identity = client_identity(status=CompanyStatus.PROSPECT)

        decision = authorize(identity, Resource("/about"))

        assert decision == Deny(DenyReason.COMPANY_INACTIVE)

    def test_inactive_company_checked_before_capability(self):
        identity = client_identity(status=CompanyStatus.INACTIVE, can_manage_team=False)

        decision = authorize(identity, classify_resource("/client/portal/team"))

        assert decision == Deny(DenyReason.COMPANY_INACTIVE)

    @pytest.mark.parametrize("role", [TeamRole.TEAM_MEMBER, TeamRole.MODERATOR])
    def test_admin_scope_requires_team_admin(self, role):
        decision = authorize(make_team(role=role), classify_resource("/admin"))

        assert decision == Deny(DenyReason.INSUFFICIENT_ROLE)

    def test_admin_scope_denies_clients_with_insufficient_role(self):
        decision = authorize(client_identity(), classify_resource("/dashboard/users"))

        assert decision == Deny(DenyReason.INSUFFICIENT_ROLE)

    def test_team_admin_allowed_on_admin_scope(self):
        decision = authorize(make_team(role=TeamRole.ADMIN), classify_resource("/admin"))

        assert isinstance(decision, Allow)

    def test_team_member_denied_client_portal(self):
        decision = authorize(make_team(), classify_resource("/client/portal"))

        assert decision == Deny(DenyReason.WRONG_IDENTITY_KIND)

    def test_client_denied_team_dashboard(self):
        decision = authorize(client_identity(), classify_resource("/dashboard"))

        assert decision == Deny(DenyReason.WRONG_IDENTITY_KIND)

    def test_team_management_requires_capability(self):
        decision = authorize(
            client_identity(can_manage_team=False),
            classify_resource("/client/portal/billing"),
        )

        assert decision == Deny(DenyReason.INSUFFICIENT_CAPABILITY)

    def test_client_with_capability_allowed_team_management(self):
        decision = authorize(
            client_identity(can_manage_team=True),
            classify_resource("/client/portal/team"),
        )

        assert decision.allowed is True

    def test_active_client_allowed_client_portal(self):
        decision = authorize(client_identity(), classify_resource("/client-dashboard"))

        assert isinstance(decision, Allow)
