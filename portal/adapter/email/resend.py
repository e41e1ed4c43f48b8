"""Invitation email delivery via the Resend HTTP API."""

import asyncio
import html

import httpx
import logfire

from portal.adapter.error import ProviderError
from portal.domain.service.notifier import (
    InvitationMessage,
    InvitationNotifier,
    NotificationError,
)


class ResendError(ProviderError):
    """Resend answered with an error status."""

    pass


def render_invitation_html(message: InvitationMessage) -> str:
    """Render the invitation email body."""
    expires = message.expires_at.strftime("%B %d, %Y")
    role = message.role.replace("_", " ")
    return (
        "<div style=\"font-family: sans-serif; max-width: 560px\">"
        f"<h2>You're invited to join {html.escape(message.company_name)}</h2>"
        f"<p>Hi {html.escape(message.invitee_name)},</p>"
        f"<p>{html.escape(message.inviter_name)} has invited you to join as "
        f"<strong>{html.escape(role)}</strong>.</p>"
        f"<p><a href=\"{html.escape(message.accept_url, quote=True)}\">"
        "Accept invitation</a></p>"
        f"<p>This invitation expires on {expires}.</p>"
        "</div>"
    )


def render_invitation_text(message: InvitationMessage) -> str:
    """Plain-text alternative of the invitation email."""
    return (
        f"Hi {message.invitee_name},\n\n"
        f"{message.inviter_name} has invited you to join {message.company_name} "
        f"as {message.role.replace('_', ' ')}.\n\n"
        f"Accept the invitation: {message.accept_url}\n\n"
        f"This invitation expires on {message.expires_at.strftime('%B %d, %Y')}.\n"
    )


class RealResendNotifier(InvitationNotifier):
    """Sends invitation emails through Resend."""

    def __init__(
        self,
        api_url: str,
        api_key: str | None,
        from_address: str,
        timeout: float = 20.0,
    ) -> None:
        """Initialize Resend notifier.

        Args:
            api_url: Resend send endpoint
            api_key: Resend API key; sending fails while unset
            from_address: Sender address
            timeout: Request timeout in seconds
        """
        self.api_url = api_url
        self.api_key = api_key
        self.from_address = from_address
        self.timeout = timeout

    async def send_invitation(self, message: InvitationMessage) -> None:
        """Send the invitation email.

        Raises:
            NotificationError: If the key is missing, Resend rejects the
                message, or the request fails or times out
        """
        with logfire.span("resend.send_invitation", role=message.role):
            if not self.api_key:
                raise NotificationError("Resend API key is not configured")

            try:
                message_id = await self._post(
                    {
                        "from": self.from_address,
                        "to": [message.to],
                        "subject": message.subject,
                        "html": render_invitation_html(message),
                        "text": render_invitation_text(message),
                    }
                )
            except httpx.TimeoutException as e:
                logfire.warn("Resend request timed out")
                raise NotificationError("Email delivery timed out") from e
            except httpx.HTTPError as e:
                logfire.error("Resend HTTP error", error=str(e))
                raise NotificationError(f"Email delivery failed: {e}") from e
            except ResendError as e:
                logfire.error(
                    "Resend rejected invitation email",
                    status_code=e.status_code,
                    error=str(e),
                )
                raise NotificationError(f"Email delivery failed: {e}") from e

            logfire.info("Invitation email sent", message_id=message_id)

    async def _post(self, payload: dict) -> str | None:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                self.api_url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=payload,
            )

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not 200 <= response.status_code < 300:
            detail = data.get("message") or data.get("error") or response.status_code
            raise ResendError(
                f"Resend API error: {detail}",
                status_code=response.status_code,
                payload=data,
            )

        return data.get("id")


class MockInvitationNotifier(InvitationNotifier):
    """Mock notifier recording sent messages.

    Set ``fail`` to simulate delivery failure, ``cancel`` to simulate the
    send being cancelled mid-flight.
    """

    def __init__(self) -> None:
        self.sent: list[InvitationMessage] = []
        self.fail = False
        self.cancel = False

    async def send_invitation(self, message: InvitationMessage) -> None:
        if self.cancel:
            raise asyncio.CancelledError()
        if self.fail:
            raise NotificationError("Email delivery failed (mock)")
        self.sent.append(message)
