"""Invitation repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import datetime

from portal.domain.model import Invitation
from portal.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
)


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    State transitions are guarded conditional updates: they only apply
    while the stored status is still ``pending`` and report whether they did.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find an invitation by token.

        Used when the invitee opens the acceptance link.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists_pending_for_email(self, email: EmailAddress) -> bool:
        """Check if a pending invitation exists for an email.

        Args:
            email: Normalized email address

        Returns:
            True if a pending invitation exists, False otherwise
        """
        pass

    @abstractmethod
    async def insert(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Args:
            invitation: The invitation to insert

        Returns:
            The inserted invitation

        Raises:
            IntegrityError: If a pending invitation already exists for the
                email or the token collides
        """
        pass

    @abstractmethod
    async def delete(self, invitation_id: InvitationId) -> bool:
        """Delete an invitation (compensation for failed delivery).

        Returns:
            True if a row was removed
        """
        pass

    @abstractmethod
    async def update_status_if_pending(
        self, invitation_id: InvitationId, status: InvitationStatus, now: datetime
    ) -> Invitation | None:
        """Move a pending invitation to ``status``.

        Args:
            invitation_id: Invitation to update
            status: Target status (expired or cancelled)
            now: Update timestamp

        Returns:
            The updated invitation, or None if it was no longer pending
        """
        pass

    @abstractmethod
    async def expire_stale(
        self, now: datetime, email: EmailAddress | None = None
    ) -> int:
        """Move every pending invitation past its expiry to ``expired``.

        Args:
            now: Current time
            email: Only expire invitations for this address, if given

        Returns:
            Number of invitations expired
        """
        pass

    @abstractmethod
    async def update_expiry_if_pending(
        self, invitation_id: InvitationId, expires_at: datetime, now: datetime
    ) -> Invitation | None:
        """Set a new expiry on a pending invitation.

        Returns:
            The updated invitation, or None if it was no longer pending
        """
        pass

    @abstractmethod
    async def mark_accepted(
        self, invitation_id: InvitationId, now: datetime
    ) -> Invitation | None:
        """Transition ``pending -> accepted``, stamping ``accepted_at``.

        Returns:
            The accepted invitation, or None if the guard matched no row
        """
        pass

    @abstractmethod
    def lock_pending(
        self, invitation_id: InvitationId
    ) -> AbstractAsyncContextManager[Invitation | None]:
        """Serialize acceptance of one invitation.

        The context manager yields the freshly re-read invitation (or None)
        and holds an exclusive lock on it until the block exits.

        Args:
            invitation_id: Invitation to lock
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """List invitations, newest first.

        Args:
            status: Optional status filter (None lists all)
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def count_by_status(self) -> dict[InvitationStatus, int]:
        """Count invitations grouped by status.

        Returns:
            Mapping of every status to its count (zero when absent)
        """
        pass
