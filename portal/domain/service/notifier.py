"""Invitation notification interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from portal.domain.value.common import ValueObject


class NotificationError(Exception):
    """Invitation email could not be delivered."""

    pass


class InvitationMessage(ValueObject):
    """Everything an invitation email shows."""

    to: str
    inviter_name: str
    invitee_name: str
    role: str
    company_name: str
    accept_url: str
    expires_at: datetime

    @property
    def subject(self) -> str:
        return f"You're invited to join {self.company_name}"


class InvitationNotifier(ABC):
    """Delivers invitation emails."""

    @abstractmethod
    async def send_invitation(self, message: InvitationMessage) -> None:
        """Send an invitation email.

        Args:
            message: Rendered invitation fields

        Raises:
            NotificationError: If delivery failed or timed out
        """
        pass
