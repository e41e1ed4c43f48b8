"""Unit tests for the Resend invitation notifier."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from portal.adapter.email.resend import (
    RealResendNotifier,
    ResendError,
    render_invitation_html,
    render_invitation_text,
)
from portal.domain.service.notifier import (
    InvitationMessage,
    InvitationNotifier,
    NotificationError,
)


@pytest.fixture
def message():
    return InvitationMessage(
        to="invitee@example.com",
        inviter_name="Ada <Admin>",
        invitee_name="Grace & Co",
        role="team_member",
        company_name="Acme Corp",
        accept_url="https://portal.example.com/invitations/accept?token=abc&x=1",
        expires_at=datetime(2026, 3, 14, tzinfo=timezone.utc),
    )


class TestRenderInvitation:
    """Tests for invitation email rendering."""

    def test_html_escapes_user_supplied_fields(self, message):
        body = render_invitation_html(message)

        assert "Ada &lt;Admin&gt;" in body
        assert "Grace &amp; Co" in body
        assert "token=abc&amp;x=1" in body
        assert "<Admin>" not in body

    def test_html_shows_role_and_expiry(self, message):
        body = render_invitation_html(message)

        assert "team member" in body
        assert "March 14, 2026" in body

    def test_text_alternative(self, message):
        body = render_invitation_text(message)

        assert body.startswith("Hi Grace & Co,")
        assert message.accept_url in body
        assert "Acme Corp as team member" in body

    def test_subject_names_company(self, message):
        assert message.subject == "You're invited to join Acme Corp"


class TestRealResendNotifier:
    """Tests for RealResendNotifier error mapping."""

    @pytest.fixture
    def notifier(self):
        return RealResendNotifier(
            api_url="https://api.resend.test/emails",
            api_key="re_test",
            from_address="Portal <noreply@example.com>",
        )

    @pytest.mark.asyncio
    async def test_missing_api_key(self, message):
        notifier = RealResendNotifier(
            api_url="https://api.resend.test/emails",
            api_key=None,
            from_address="noreply@example.com",
        )

        with pytest.raises(NotificationError, match="not configured"):
            await notifier.send_invitation(message)

    @pytest.mark.asyncio
    async def test_sends_payload(self, notifier, message):
        with patch.object(
            notifier, "_post", AsyncMock(return_value="msg_123")
        ) as mock_post:
            await notifier.send_invitation(message)

        payload = mock_post.call_args.args[0]
        assert payload["to"] == ["invitee@example.com"]
        assert payload["from"] == "Portal <noreply@example.com>"
        assert payload["subject"] == message.subject
        assert "html" in payload and "text" in payload

    @pytest.mark.asyncio
    async def test_timeout_becomes_notification_error(self, notifier, message):
        with patch.object(
            notifier, "_post", AsyncMock(side_effect=httpx.ReadTimeout("slow"))
        ):
            with pytest.raises(NotificationError, match="timed out"):
                await notifier.send_invitation(message)

    @pytest.mark.asyncio
    async def test_rejection_becomes_notification_error(self, notifier, message):
        error = ResendError("Resend API error: invalid from", status_code=422)
        with patch.object(notifier, "_post", AsyncMock(side_effect=error)):
            with pytest.raises(NotificationError, match="invalid from"):
                await notifier.send_invitation(message)


class TestInvitationNotifierInterface:
    def test_interface_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            InvitationNotifier()

    def test_implementation_must_send(self):
        class SilentNotifier(InvitationNotifier):
            pass

        with pytest.raises(TypeError):
            SilentNotifier()
